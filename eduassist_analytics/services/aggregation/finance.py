from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ...models.fee import FeeStatus
from .records import FeeRecord, to_decimal


@dataclass(frozen=True)
class FinancialSummary:
    fee_collection: Decimal
    outstanding_fees: Decimal


def summarize_fees(records: Iterable[FeeRecord]) -> FinancialSummary:
    """Collected and outstanding totals over every fee row of the class."""
    collected = Decimal("0")
    outstanding = Decimal("0")
    for record in records:
        paid = to_decimal(record.paid_amount)
        collected += paid
        # A row marked paid with a recorded payment owes nothing
        if (record.status != FeeStatus.PAID.value or not record.paid_amount) and record.amount:
            outstanding += to_decimal(record.amount) - paid

    return FinancialSummary(fee_collection=collected, outstanding_fees=outstanding)
