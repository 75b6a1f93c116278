from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, coerce_datetime, coerce_time
from ..common.numbers import coerce_bool, coerce_number, optional_number
from .fields import pick


def _optional_int(value: Any) -> Optional[int]:
    number = optional_number(value)
    return int(number) if number is not None else None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class JobEntryReport:
    """Read-model of a stored job entry, as served to reports and dashboards.

    Amounts are the values computed at save time.
    """

    entry_id: int
    job_name: Optional[str] = None
    worker_name: Optional[str] = None
    group_name: Optional[str] = None
    entry_type: Optional[str] = None
    expected_hours: Optional[float] = None
    hours_taken: Optional[float] = None
    items_completed: Optional[float] = None
    rate_per_job: Optional[float] = None
    productive_hours: Optional[float] = None
    extra_hours: Optional[float] = None
    underperformance_hours: Optional[float] = None
    incentive_amount: Optional[float] = None
    total_amount: Optional[float] = None
    is_post_lunch: bool = False
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def amount(self) -> float:
        return self.total_amount or 0.0

    @property
    def hours(self) -> float:
        return self.hours_taken or 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JobEntryReport":
        return cls(
            entry_id=_optional_int(pick(data, "entryId")) or 0,
            job_name=_optional_str(pick(data, "jobName")),
            worker_name=_optional_str(pick(data, "workerName")),
            group_name=_optional_str(pick(data, "groupName")),
            entry_type=_optional_str(pick(data, "entryType")),
            expected_hours=optional_number(pick(data, "expectedHours")),
            hours_taken=optional_number(pick(data, "hoursTaken")),
            items_completed=optional_number(pick(data, "itemsCompleted")),
            rate_per_job=optional_number(pick(data, "ratePerJob")),
            productive_hours=optional_number(pick(data, "productiveHours")),
            extra_hours=optional_number(pick(data, "extraHours")),
            underperformance_hours=optional_number(pick(data, "underperformanceHours")),
            incentive_amount=optional_number(pick(data, "incentiveAmount")),
            total_amount=optional_number(pick(data, "totalAmount")),
            is_post_lunch=coerce_bool(pick(data, "isPostLunch", False)),
            remarks=_optional_str(pick(data, "remarks")),
            created_at=coerce_datetime(pick(data, "createdAt")),
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Read-model: one worker's attendance mark for a day."""

    id: int
    worker_id: Optional[int]
    attendance_date: Optional[date]
    status: str
    worker_name: Optional[str] = None
    check_in_time: Optional[time] = None
    check_out_time: Optional[time] = None
    total_hours: Optional[float] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            id=_optional_int(pick(data, "id")) or 0,
            worker_id=_optional_int(pick(data, "workerId")),
            attendance_date=coerce_date(pick(data, "attendanceDate")),
            status=str(pick(data, "status") or ""),
            worker_name=_optional_str(pick(data, "workerName")),
            check_in_time=coerce_time(pick(data, "checkInTime")),
            check_out_time=coerce_time(pick(data, "checkOutTime")),
            total_hours=optional_number(pick(data, "totalHours")),
            remarks=_optional_str(pick(data, "remarks")),
            created_at=coerce_datetime(pick(data, "createdAt")),
        )


@dataclass(frozen=True)
class LeaveRequest:
    id: int
    worker_id: Optional[int]
    status: str
    total_days: float = 0.0
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    applied_date: Optional[date] = None
    leave_type_name: Optional[str] = None
    worker_name: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LeaveRequest":
        return cls(
            id=_optional_int(pick(data, "id")) or 0,
            worker_id=_optional_int(pick(data, "workerId")),
            status=str(pick(data, "status") or ""),
            total_days=coerce_number(pick(data, "totalDays")),
            start_date=coerce_date(pick(data, "startDate")),
            end_date=coerce_date(pick(data, "endDate")),
            applied_date=coerce_date(pick(data, "appliedDate")),
            leave_type_name=_optional_str(pick(data, "leaveTypeName")),
            worker_name=_optional_str(pick(data, "workerName")),
            reason=_optional_str(pick(data, "reason")),
        )


@dataclass(frozen=True)
class LeaveBalance:
    worker_id: Optional[int]
    year: Optional[int] = None
    allocated: float = 0.0
    used: float = 0.0
    balance: float = 0.0
    leave_type_name: Optional[str] = None
    worker_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LeaveBalance":
        return cls(
            worker_id=_optional_int(pick(data, "workerId")),
            year=_optional_int(pick(data, "year")),
            allocated=coerce_number(pick(data, "allocated")),
            used=coerce_number(pick(data, "used")),
            balance=coerce_number(pick(data, "balance")),
            leave_type_name=_optional_str(pick(data, "leaveTypeName")),
            worker_name=_optional_str(pick(data, "workerName")),
        )


@dataclass(frozen=True)
class Worker:
    worker_id: int
    full_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Worker":
        return cls(
            worker_id=_optional_int(pick(data, "workerId")) or 0,
            full_name=str(pick(data, "fullName") or ""),
        )
