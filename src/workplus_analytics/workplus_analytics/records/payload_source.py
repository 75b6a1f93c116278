from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence, TypeVar

from ..core.exceptions import RecordSourceError
from .fields import pick
from .model import AttendanceRecord, JobEntryReport, LeaveBalance, LeaveRequest, Worker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PayloadRecordSource:
    """Record source backed by an already-fetched JSON payload.

    Keys: ``jobEntries``, ``attendance``, ``leaveRequests``, ``leaveBalances``
    and ``workers``; each is a list of API objects. Missing keys read as empty
    lists. Non-object rows are skipped.
    """

    def __init__(self, payload: Mapping[str, Any]):
        if not isinstance(payload, Mapping):
            raise RecordSourceError("Request body must be a JSON object")
        self._payload = payload

    def _rows(self, key: str, factory: Callable[[Mapping[str, Any]], T]) -> list[T]:
        rows = pick(self._payload, key) or []
        if not isinstance(rows, list):
            raise RecordSourceError(f"'{key}' must be a list")

        out: list[T] = []
        for row in rows:
            if not isinstance(row, Mapping):
                logger.warning("Skipping non-object row in '%s'", key)
                continue
            out.append(factory(row))
        return out

    def get_job_entries(self) -> Sequence[JobEntryReport]:
        return self._rows("jobEntries", JobEntryReport.from_dict)

    def get_attendance(self) -> Sequence[AttendanceRecord]:
        return self._rows("attendance", AttendanceRecord.from_dict)

    def get_leave_requests(self) -> Sequence[LeaveRequest]:
        return self._rows("leaveRequests", LeaveRequest.from_dict)

    def get_leave_balances(self) -> Sequence[LeaveBalance]:
        return self._rows("leaveBalances", LeaveBalance.from_dict)

    def get_workers(self) -> Sequence[Worker]:
        return self._rows("workers", Worker.from_dict)
