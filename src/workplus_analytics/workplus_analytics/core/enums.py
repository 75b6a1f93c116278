from __future__ import annotations

from enum import Enum


class JobMode(str, Enum):
    """Compensation mode of a job: paid per hour or per item."""

    HOURLY = "Hourly"
    ITEM = "Item"


class IncentiveType(str, Enum):
    """How the incentive bonus rate is applied to extra work."""

    PER_UNIT = "PerUnit"
    PERCENTAGE = "Percentage"


class EntryType(str, Enum):
    INDIVIDUAL = "Individual"
    GROUP = "Group"


class AttendanceStatus(str, Enum):
    """Attendance statuses as stored by the HR module."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    ON_LEAVE = "On Leave"


class RequestStatus(str, Enum):
    """Leave request approval workflow states."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class CompletionStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"


class ShiftSlot(str, Enum):
    MORNING = "Morning"
    EVENING = "Evening"
    NIGHT = "Night"


class AlertSeverity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class OperationStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    PENDING = "pending"


class ReportPeriod(str, Enum):
    """Look-back periods offered by the report dialogs."""

    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
