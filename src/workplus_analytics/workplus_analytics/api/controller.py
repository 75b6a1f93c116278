from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.numbers import optional_number
from ..core.enums import EntryType, ReportPeriod
from ..core.exceptions import RecordSourceError, ValidationError
from ..core.result import OperationResult
from ..dashboards.service import DashboardService
from ..jobs.model import JobDefinition
from ..records.fields import pick
from ..records.payload_source import PayloadRecordSource
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"error": message}), status

    def _body() -> Any:
        return request.get_json(silent=True)

    def _period() -> ReportPeriod:
        raw = request.args.get("period", ReportPeriod.ALL.value)
        try:
            return ReportPeriod(raw)
        except ValueError:
            raise ValidationError(f"Unknown period: {raw}")

    def _int_arg(name: str) -> Optional[int]:
        raw = request.args.get(name)
        if raw is None:
            return None
        number = optional_number(raw)
        if number is None:
            raise ValidationError(f"'{name}' must be a number")
        return int(number)

    def _optional_date(value: Any, name: str):
        if not value:
            return None
        try:
            return parse_iso_date(str(value))
        except ValueError:
            raise ValidationError(f"'{name}' must be a YYYY-MM-DD date")

    dashboards: dict[str, Callable[[DashboardService], OperationResult]] = {
        "attendance": lambda s: s.attendance(),
        "leave": lambda s: s.leave(),
        "leave-analytics": lambda s: s.leave_analytics(year=_int_arg("year")),
        "job-entries": lambda s: s.job_entries(),
        "earnings": lambda s: s.earnings(period=_period()),
        "job-completion": lambda s: s.job_completion(period=_period()),
        "worker-performance": lambda s: s.worker_performance(worker_name=request.args.get("workerName")),
        "hr-worker-performance": lambda s: s.hr_worker_performance(worker_id=_int_arg("workerId")),
    }

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/compensation/compute", methods=["POST"], endpoint="compute_compensation")
    def compute_compensation():
        body = _body()
        if not isinstance(body, dict) or not isinstance(pick(body, "job"), dict):
            return _error("Request body must contain a 'job' object", 400)

        service = container.compensation_service
        try:
            job = JobDefinition.from_dict(pick(body, "job"))
            raw_observation = pick(body, "observation")
            if isinstance(raw_observation, dict):
                observation = service.observation_from_dict(raw_observation)
            else:
                raw_type = pick(body, "entryType") or EntryType.INDIVIDUAL.value
                try:
                    entry_type = EntryType(raw_type)
                except ValueError:
                    raise ValidationError(f"Unknown entry type: {raw_type}")
                worker_id = optional_number(pick(body, "workerId"))
                group_id = optional_number(pick(body, "groupId"))
                observation = service.observation_for_job(
                    job,
                    optional_number(pick(body, "actualOutput")),
                    entry_type=entry_type,
                    worker_id=int(worker_id) if worker_id is not None else None,
                    group_id=int(group_id) if group_id is not None else None,
                    shift=pick(body, "shift"),
                    remarks=pick(body, "remarks"),
                )

            result = service.compute(job, observation)
            entry = service.build_entry(job, observation)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Compensation computation failed")
            return _error("Internal error while computing compensation", 500)

        return jsonify({"result": result.to_dict(), "entry": entry.to_dict()})

    @app.route("/api/dashboards/<name>", methods=["POST"], endpoint="dashboard")
    def dashboard(name: str):
        build = dashboards.get(name)
        if build is None:
            return _error(f"Unknown dashboard: {name}", 404)

        try:
            source = PayloadRecordSource(_body() or {})
            outcome = build(container.dashboards(source))
        except (ValidationError, RecordSourceError) as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Dashboard %s failed", name, extra={"dashboard": name})
            return _error("Internal error while building dashboard", 500)

        status = 200 if outcome.is_success else 502
        return jsonify(outcome.to_dict()), status

    @app.route("/api/reports/job-entries", methods=["POST"], endpoint="job_entry_report")
    def job_entry_report():
        body = _body() or {}
        try:
            source = PayloadRecordSource(body)
            reports = container.reports(source)

            columns = pick(body, "columns")
            data = reports.build_job_entry_report(
                start=_optional_date(pick(body, "start"), "start"),
                end=_optional_date(pick(body, "end"), "end"),
                worker_name=pick(body, "workerName"),
                columns=list(columns) if isinstance(columns, list) else None,
            )

            payload: dict[str, Any] = {"rows": data.rows, "summary": data.summary}
            raw_jobs = pick(body, "jobs")
            if isinstance(raw_jobs, list):
                jobs = [JobDefinition.from_dict(j) for j in raw_jobs if isinstance(j, dict)]
                mismatches = reports.reconcile_amounts({j.job_name: j for j in jobs})
                payload["mismatches"] = [
                    {
                        "entryId": m.entry_id,
                        "jobName": m.job_name,
                        "storedAmount": m.stored_amount,
                        "computedAmount": m.computed_amount,
                    }
                    for m in mismatches
                ]
        except (ValidationError, RecordSourceError) as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Job entry report failed")
            return _error("Internal error while building report", 500)

        return jsonify(payload)
