"""In-memory loan ledger with installment and payment tracking."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from loan_tracker.exceptions import (
    InstallmentNotFoundError,
    InvalidPaymentError,
    LoanNotFoundError,
    ValidationError,
)
from loan_tracker.generators.base import IdFactory
from loan_tracker.logging import get_logger
from loan_tracker.models import (
    PAYMENT_TERMS,
    Installment,
    InstallmentStatus,
    Loan,
    LoanDraft,
    LoanSource,
    LoanStatus,
    Payment,
)
from loan_tracker.schedule import CENT, generate_schedule, monthly_installment

logger = get_logger(__name__)

ZERO = Decimal("0")
MAX_AMOUNT = Decimal("1000000000000")


@dataclass
class PaymentAllocation:
    """Outcome of a lump-sum payment.

    ``unapplied`` is the part of the loan's payments not yet covering a whole
    installment. It stays on the loan as ``installment_credit`` and is used
    first by the next lump payment.
    """

    payment: Payment
    paid_installments: list[Installment]
    unapplied: Decimal


@dataclass
class LedgerSummary:
    """Totals across all loans."""

    loan_count: int
    active_loans: int
    total_borrowed: Decimal
    total_debt: Decimal
    total_paid: Decimal


def loan_progress(loan: Loan) -> Decimal:
    """Percentage of the loan amount already repaid."""
    if loan.amount <= 0:
        return ZERO
    repaid = loan.amount - loan.remaining_balance
    return (repaid / loan.amount * 100).quantize(CENT)


def _to_decimal(value, error_cls: type[ValidationError], label: str) -> Decimal:
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise error_cls(f"{label} must be a number, got {value!r}") from e
    if not result.is_finite():
        raise error_cls(f"{label} must be a finite number, got {value!r}")
    return result


@dataclass
class LoanLedger:
    """In-memory collection of loans, keyed by id in insertion order."""

    loans: dict[str, Loan] = field(default_factory=dict)
    id_factory: IdFactory = field(default_factory=IdFactory)

    @classmethod
    def from_loans(cls, loans: list[Loan], id_factory: IdFactory | None = None) -> "LoanLedger":
        """Build a ledger from previously stored loans."""
        ledger = cls(id_factory=id_factory or IdFactory())
        for loan in loans:
            ledger.loans[loan.loan_id] = loan
        return ledger

    def get(self, loan_id: str) -> Loan:
        """Get a loan by id.

        Raises
        ------
        LoanNotFoundError
            If no loan has this id.
        """
        try:
            return self.loans[loan_id]
        except KeyError:
            raise LoanNotFoundError(f"Loan {loan_id} not found") from None

    def list_loans(self) -> list[Loan]:
        """All loans in creation order."""
        return list(self.loans.values())

    def create(self, draft: LoanDraft, today: date | None = None) -> Loan:
        """Add a new loan with a fresh id, timestamp and installment schedule.

        Parameters
        ----------
        draft : LoanDraft
            Form fields for the loan.
        today : date | None
            Reference date for the overdue check (default: today).

        Returns
        -------
        Loan
            The stored loan.

        Raises
        ------
        ValidationError
            If a required field is missing or out of range.
        """
        amount, interest_rate = self._validate(draft)
        created_at = datetime.now()

        loan = Loan(
            loan_id=self.id_factory.new_id(),
            source=draft.source.strip(),
            amount=amount,
            remaining_balance=amount,
            due_date=draft.due_date,
            payment_term=draft.payment_term,
            monthly_installment=monthly_installment(amount, draft.payment_term),
            status=LoanStatus.ACTIVE,
            created_at=created_at,
            product_name=draft.product_name or None,
            interest_rate=interest_rate,
            installments=generate_schedule(
                amount, draft.payment_term, draft.due_date, self.id_factory.new_id
            ),
        )
        self._refresh_status(loan, today or created_at.date())
        self.loans[loan.loan_id] = loan

        logger.info(
            "Created loan %s: %s %s over %d months",
            loan.loan_id, loan.source, loan.amount, loan.payment_term,
        )
        return loan

    def update(self, loan: Loan, today: date | None = None) -> None:
        """Replace the stored loan that has the same id.

        Raises
        ------
        LoanNotFoundError
            If no loan has this id.
        """
        if loan.loan_id not in self.loans:
            raise LoanNotFoundError(f"Loan {loan.loan_id} not found")

        self._refresh_status(loan, today or date.today())
        self.loans[loan.loan_id] = loan
        logger.info("Updated loan %s", loan.loan_id)

    def edit(self, loan_id: str, draft: LoanDraft, today: date | None = None) -> Loan:
        """Apply edited form fields to an existing loan.

        Changing the amount, term or due date rebuilds the schedule. The
        balance is recomputed from the payment history, and the money paid so
        far settles the new installments in month order, with any leftover
        carried as ``installment_credit``.
        """
        loan = self.get(loan_id)
        amount, interest_rate = self._validate(draft)

        loan.source = draft.source.strip()
        loan.product_name = draft.product_name or None
        loan.interest_rate = interest_rate

        if (amount, draft.payment_term, draft.due_date) != (loan.amount, loan.payment_term, loan.due_date):
            loan.amount = amount
            loan.payment_term = draft.payment_term
            loan.due_date = draft.due_date
            loan.monthly_installment = monthly_installment(amount, draft.payment_term)
            loan.installments = generate_schedule(
                amount, draft.payment_term, draft.due_date, self.id_factory.new_id
            )
            loan.remaining_balance = max(ZERO, amount - loan.total_paid)

            paid_on = loan.payments[-1].date if loan.payments else (today or date.today())
            paid = self._allocate(loan, loan.total_paid, paid_on)
            logger.info("Rebuilt schedule for loan %s (%d installments covered)", loan_id, len(paid))

        self._refresh_status(loan, today or date.today())
        logger.info("Edited loan %s", loan_id)
        return loan

    def delete(self, loan_id: str) -> Loan:
        """Remove a loan and return it.

        Raises
        ------
        LoanNotFoundError
            If no loan has this id.
        """
        loan = self.get(loan_id)
        del self.loans[loan_id]
        logger.info("Deleted loan %s", loan_id)
        return loan

    def record_payment(
        self,
        loan_id: str,
        amount: Decimal,
        paid_on: date | None = None,
        note: str | None = None,
        today: date | None = None,
    ) -> PaymentAllocation:
        """Record a lump-sum payment and settle installments in month order.

        An installment is only marked paid once fully covered. Whatever is
        left after the last covered installment is carried on the loan as
        ``installment_credit`` and reported as ``unapplied``.

        Raises
        ------
        LoanNotFoundError
            If no loan has this id.
        InvalidPaymentError
            If the amount is not positive or exceeds the remaining balance.
        """
        loan = self.get(loan_id)
        amount = _to_decimal(amount, InvalidPaymentError, "Payment amount")
        if amount <= 0:
            raise InvalidPaymentError(f"Payment amount must be positive, got {amount}")
        if amount > loan.remaining_balance:
            raise InvalidPaymentError(
                f"Payment {amount} exceeds remaining balance {loan.remaining_balance}"
            )
        if amount != amount.quantize(CENT):
            raise InvalidPaymentError(f"Payment amount must have at most two decimal places, got {amount}")

        paid_on = paid_on or date.today()
        payment = Payment(
            payment_id=self.id_factory.new_id(),
            amount=amount,
            date=paid_on,
            note=note or None,
        )
        loan.payments.append(payment)
        loan.remaining_balance = max(ZERO, loan.remaining_balance - amount)

        paid = self._allocate(loan, loan.installment_credit + amount, paid_on)
        self._refresh_status(loan, today or date.today())

        logger.info(
            "Recorded payment of %s on loan %s: %d installments paid, %s unapplied",
            amount, loan_id, len(paid), loan.installment_credit,
        )
        return PaymentAllocation(payment=payment, paid_installments=paid, unapplied=loan.installment_credit)

    def pay_installment(
        self,
        loan_id: str,
        installment_id: str,
        paid_on: date | None = None,
        today: date | None = None,
    ) -> Payment | None:
        """Mark one installment paid and record its amount as a payment.

        Returns ``None`` without changing anything when the installment is
        already paid.

        Raises
        ------
        LoanNotFoundError
            If no loan has this id.
        InstallmentNotFoundError
            If the loan has no installment with this id.
        """
        loan = self.get(loan_id)
        installment = loan.find_installment(installment_id)
        if installment is None:
            raise InstallmentNotFoundError(f"Installment {installment_id} not found on loan {loan_id}")
        if installment.is_paid:
            logger.debug("Installment %s already paid", installment_id)
            return None

        paid_on = paid_on or date.today()
        amount = min(installment.amount, loan.remaining_balance)
        installment.status = InstallmentStatus.PAID
        installment.paid_date = paid_on

        payment = None
        if amount > 0:
            payment = Payment(
                payment_id=self.id_factory.new_id(),
                amount=amount,
                date=paid_on,
                note=f"Month {installment.month} installment",
                installment_id=installment.installment_id,
            )
            loan.payments.append(payment)
            loan.remaining_balance = max(ZERO, loan.remaining_balance - amount)

        if loan.remaining_balance <= 0:
            self._allocate(loan, ZERO, paid_on)
        self._refresh_status(loan, today or date.today())

        logger.info("Paid month %d of loan %s (%s)", installment.month, loan_id, amount)
        return payment

    def refresh_statuses(self, today: date | None = None) -> None:
        """Re-derive loan and installment statuses for the given date."""
        today = today or date.today()
        for loan in self.loans.values():
            self._refresh_status(loan, today)

    def summary(self) -> LedgerSummary:
        """Return totals across all loans."""
        total_borrowed = sum((loan.amount for loan in self.loans.values()), ZERO)
        total_debt = sum((loan.remaining_balance for loan in self.loans.values()), ZERO)
        return LedgerSummary(
            loan_count=len(self.loans),
            active_loans=sum(1 for loan in self.loans.values() if loan.status == LoanStatus.ACTIVE),
            total_borrowed=total_borrowed,
            total_debt=total_debt,
            total_paid=total_borrowed - total_debt,
        )

    def _validate(self, draft: LoanDraft) -> tuple[Decimal, Decimal | None]:
        """Check form fields and return the amount and interest rate as Decimals."""
        sources = {s.value for s in LoanSource}
        if not draft.source or draft.source.strip() not in sources:
            raise ValidationError(f"Source must be one of {sorted(sources)}, got {draft.source!r}")

        amount = _to_decimal(draft.amount, ValidationError, "Amount")
        if amount <= 0:
            raise ValidationError(f"Amount must be positive, got {amount}")
        if amount > MAX_AMOUNT:
            raise ValidationError(f"Amount must not exceed {MAX_AMOUNT}, got {amount}")
        if amount != amount.quantize(CENT):
            raise ValidationError(f"Amount must have at most two decimal places, got {amount}")

        if draft.due_date is None:
            raise ValidationError("Due date is required")
        if draft.payment_term not in PAYMENT_TERMS:
            raise ValidationError(f"Payment term must be one of {PAYMENT_TERMS}, got {draft.payment_term}")

        interest_rate = None
        if draft.interest_rate is not None:
            interest_rate = _to_decimal(draft.interest_rate, ValidationError, "Interest rate")
            if interest_rate < 0:
                raise ValidationError(f"Interest rate cannot be negative, got {interest_rate}")
        return amount, interest_rate

    def _allocate(self, loan: Loan, available: Decimal, paid_on: date) -> list[Installment]:
        """Settle pending installments from ``available`` and store the leftover credit."""
        newly_paid = []
        settled = loan.remaining_balance <= 0

        for installment in loan.pending_installments():
            if not settled and available < installment.amount:
                break
            available -= installment.amount
            installment.status = InstallmentStatus.PAID
            installment.paid_date = paid_on
            newly_paid.append(installment)

        loan.installment_credit = ZERO if settled or not loan.installments else max(ZERO, available)
        return newly_paid

    def _refresh_status(self, loan: Loan, today: date) -> None:
        for installment in loan.installments:
            if not installment.is_paid:
                installment.status = (
                    InstallmentStatus.OVERDUE if installment.due_date < today else InstallmentStatus.PENDING
                )

        if loan.remaining_balance <= 0:
            loan.remaining_balance = ZERO
            loan.status = LoanStatus.PAID
        elif loan.installments:
            overdue = any(i.status == InstallmentStatus.OVERDUE for i in loan.installments)
            loan.status = LoanStatus.OVERDUE if overdue else LoanStatus.ACTIVE
        else:
            loan.status = LoanStatus.OVERDUE if loan.due_date < today else LoanStatus.ACTIVE
