"""Loan models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from loan_tracker.models.enums import InstallmentStatus, LoanStatus


@dataclass
class Installment:
    """One month of a loan's repayment schedule."""

    installment_id: str
    month: int  # 1..payment_term
    amount: Decimal
    due_date: date
    status: InstallmentStatus = InstallmentStatus.PENDING
    paid_date: date | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == InstallmentStatus.PAID


@dataclass
class Payment:
    """Money paid towards a loan."""

    payment_id: str
    amount: Decimal
    date: date
    note: str | None = None
    installment_id: str | None = None  # Set when paying a single installment


@dataclass
class Loan:
    """Tracked loan with its installment schedule and payment history."""

    loan_id: str
    source: str
    amount: Decimal
    remaining_balance: Decimal
    due_date: date
    payment_term: int  # Months: 1, 3, 6 or 12
    monthly_installment: Decimal
    status: LoanStatus
    created_at: datetime
    product_name: str | None = None
    interest_rate: Decimal | None = None  # Percentage, informational only
    installments: list[Installment] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    installment_credit: Decimal = Decimal("0")  # Lump-payment remainder not yet covering an installment

    @property
    def total_paid(self) -> Decimal:
        return sum((p.amount for p in self.payments), Decimal("0"))

    def pending_installments(self) -> list[Installment]:
        """Unpaid installments in month order."""
        return sorted((i for i in self.installments if not i.is_paid), key=lambda i: i.month)

    def find_installment(self, installment_id: str) -> Installment | None:
        for installment in self.installments:
            if installment.installment_id == installment_id:
                return installment
        return None


@dataclass
class LoanDraft:
    """User-entered loan fields, as submitted by the add/edit form."""

    source: str
    amount: Decimal
    due_date: date | None
    payment_term: int
    product_name: str | None = None
    interest_rate: Decimal | None = None
