"""
Tests for the attendance and financial summaries.
"""
from decimal import Decimal

import pytest

from eduassist_analytics.services.aggregation import (
    AttendanceRecord, FeeRecord, summarize_attendance, summarize_fees,
)


def attendance(present, absent, **others):
    rows = [AttendanceRecord("present")] * present + [AttendanceRecord("absent")] * absent
    for status, count in others.items():
        rows += [AttendanceRecord(status)] * count
    return rows


def fee(amount, paid, status):
    return FeeRecord(
        amount=Decimal(str(amount)) if amount is not None else None,
        paid_amount=Decimal(str(paid)) if paid is not None else None,
        status=status,
    )


class TestSummarizeAttendance:
    def test_presence_rate(self):
        summary = summarize_attendance(attendance(18, 2))
        assert summary.attendance_rate == pytest.approx(90.0)
        assert summary.low_attendance_count == 2
        assert (summary.present, summary.absent) == (18, 2)

    def test_no_rows_has_no_rate(self):
        summary = summarize_attendance([])
        assert summary.attendance_rate is None
        assert summary.low_attendance_count == 0

    def test_other_statuses_are_not_counted(self):
        summary = summarize_attendance(attendance(3, 1, late=4, excused=2))
        assert summary.attendance_rate == pytest.approx(75.0)
        assert summary.low_attendance_count == 1

    def test_only_unrecognized_statuses_has_no_rate(self):
        assert summarize_attendance(attendance(0, 0, late=3)).attendance_rate is None


class TestSummarizeFees:
    def test_paid_and_partial(self):
        summary = summarize_fees([fee(1000, 1000, "paid"), fee(500, 200, "partial")])
        assert summary.fee_collection == Decimal("1200")
        assert summary.outstanding_fees == Decimal("300")

    def test_unpaid_without_payment_owes_full_amount(self):
        summary = summarize_fees([fee(750, None, "unpaid")])
        assert summary.fee_collection == 0
        assert summary.outstanding_fees == Decimal("750")

    def test_paid_status_with_zero_payment_is_still_outstanding(self):
        summary = summarize_fees([fee(400, 0, "paid")])
        assert summary.outstanding_fees == Decimal("400")

    def test_fully_paid_large_amount_contributes_nothing_outstanding(self):
        summary = summarize_fees([fee(25000, 25000, "paid")])
        assert summary.fee_collection == Decimal("25000")
        assert summary.outstanding_fees == 0

    def test_missing_amount_contributes_nothing_outstanding(self):
        summary = summarize_fees([fee(None, 100, "partial")])
        assert summary.fee_collection == Decimal("100")
        assert summary.outstanding_fees == 0

    def test_no_rows(self):
        summary = summarize_fees([])
        assert summary.fee_collection == 0
        assert summary.outstanding_fees == 0
