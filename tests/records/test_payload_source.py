from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.workplus_analytics.workplus_analytics.core.exceptions import RecordSourceError
from src.workplus_analytics.workplus_analytics.records.payload_source import PayloadRecordSource


def test_reads_camel_case_job_entries():
    source = PayloadRecordSource(
        {
            "jobEntries": [
                {
                    "entryId": 4,
                    "jobName": "Cutting",
                    "workerName": " Alice ",
                    "hoursTaken": "7.5",
                    "totalAmount": 750,
                    "isPostLunch": "true",
                    "createdAt": "2026-03-10T08:30:00",
                }
            ]
        }
    )

    (entry,) = source.get_job_entries()

    assert entry.entry_id == 4
    assert entry.worker_name == "Alice"
    assert entry.hours_taken == 7.5
    assert entry.items_completed is None
    assert entry.is_post_lunch is True
    assert entry.created_at == datetime(2026, 3, 10, 8, 30)


def test_reads_pascal_case_attendance():
    source = PayloadRecordSource(
        {
            "Attendance": [
                {
                    "Id": 1,
                    "WorkerId": 3,
                    "AttendanceDate": "2026-03-10",
                    "Status": "Late",
                    "CheckInTime": "09:15",
                }
            ]
        }
    )

    (mark,) = source.get_attendance()

    assert mark.worker_id == 3
    assert mark.attendance_date == date(2026, 3, 10)
    assert mark.status == "Late"
    assert mark.check_in_time == time(9, 15)


def test_leave_records_and_workers():
    source = PayloadRecordSource(
        {
            "leaveRequests": [{"id": 1, "workerId": 2, "status": "Approved", "totalDays": 2, "startDate": "2026-01-05"}],
            "leaveBalances": [{"workerId": 2, "balance": "1.5"}],
            "workers": [{"workerId": 2, "fullName": "Bob"}],
        }
    )

    assert source.get_leave_requests()[0].start_date == date(2026, 1, 5)
    assert source.get_leave_balances()[0].balance == 1.5
    assert source.get_workers()[0].full_name == "Bob"


def test_missing_keys_read_as_empty():
    source = PayloadRecordSource({})

    assert source.get_job_entries() == []
    assert source.get_workers() == []


def test_malformed_values_become_absent():
    source = PayloadRecordSource({"jobEntries": [{"entryId": 1, "hoursTaken": "abc", "createdAt": "yesterday"}]})

    (entry,) = source.get_job_entries()

    assert entry.hours_taken is None
    assert entry.created_at is None


def test_non_object_rows_are_skipped():
    source = PayloadRecordSource({"workers": [{"workerId": 1, "fullName": "A"}, "junk", 3]})

    assert len(source.get_workers()) == 1


def test_non_list_collection_is_an_error():
    source = PayloadRecordSource({"attendance": {"id": 1}})

    with pytest.raises(RecordSourceError):
        source.get_attendance()


def test_non_object_payload_is_an_error():
    with pytest.raises(RecordSourceError):
        PayloadRecordSource(["not", "a", "mapping"])
