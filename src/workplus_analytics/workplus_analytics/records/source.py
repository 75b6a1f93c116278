from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord, JobEntryReport, LeaveBalance, LeaveRequest, Worker


class RecordSource(Protocol):
    """Where dashboards get their records from.

    Implementations raise ``RecordSourceError`` when a fetch fails.
    """

    def get_job_entries(self) -> Sequence[JobEntryReport]:
        raise NotImplementedError

    def get_attendance(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_leave_requests(self) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def get_leave_balances(self) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def get_workers(self) -> Sequence[Worker]:
        raise NotImplementedError
