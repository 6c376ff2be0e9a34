"""Monthly installment schedule generation.

Rounding rule: every installment is ``amount / term`` truncated to the cent,
except the last one, which absorbs the difference so that the schedule always
sums exactly to the loan amount.
"""

import calendar
from datetime import date
from decimal import ROUND_DOWN, Decimal
from typing import Callable

from loan_tracker.exceptions import ValidationError
from loan_tracker.generators.base import IdFactory
from loan_tracker.models import PAYMENT_TERMS, Installment, InstallmentStatus

CENT = Decimal("0.01")

_default_ids = IdFactory()


def add_months(d: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping the day to the month end.

    >>> add_months(date(2024, 1, 31), 1)
    datetime.date(2024, 2, 29)
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def monthly_installment(amount: Decimal, term: int) -> Decimal:
    """Regular installment amount for a loan, truncated to the cent."""
    if term not in PAYMENT_TERMS:
        raise ValidationError(f"Payment term must be one of {PAYMENT_TERMS}, got {term}")
    return (Decimal(amount) / term).quantize(CENT, rounding=ROUND_DOWN)


def generate_schedule(
    amount: Decimal,
    term: int,
    start_date: date,
    new_id: Callable[[], str] | None = None,
) -> list[Installment]:
    """Split a loan amount into monthly installments.

    Parameters
    ----------
    amount : Decimal
        Loan principal.
    term : int
        Number of monthly installments (1, 3, 6 or 12).
    start_date : date
        Due date of the first installment.
    new_id : Callable[[], str] | None
        Id source for the installments.

    Returns
    -------
    list[Installment]
        ``term`` pending installments, month 1 first.
    """
    new_id = new_id or _default_ids.new_id
    regular = monthly_installment(amount, term)
    last = Decimal(amount) - regular * (term - 1)

    return [
        Installment(
            installment_id=new_id(),
            month=month,
            amount=regular if month < term else last,
            due_date=add_months(start_date, month - 1),
            status=InstallmentStatus.PENDING,
        )
        for month in range(1, term + 1)
    ]
