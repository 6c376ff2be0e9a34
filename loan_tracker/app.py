"""Application state: the ledger, its store, and the UI selection pointers."""

from datetime import date
from decimal import Decimal

from loan_tracker.config import LoanTrackerConfig
from loan_tracker.exceptions import ValidationError
from loan_tracker.generators.base import IdFactory
from loan_tracker.logging import get_logger
from loan_tracker.models import Loan, LoanDraft, Payment
from loan_tracker.sinks.json_store import JsonLedgerStore
from loan_tracker.store.ledger import LoanLedger, PaymentAllocation

logger = get_logger(__name__)


class LedgerApp:
    """Facade over the ledger that saves the full state after every mutation.

    Also tracks which loan is being edited and which one is selected for
    payment, so front ends don't keep that state in globals.
    """

    def __init__(self, store: JsonLedgerStore, ledger: LoanLedger | None = None) -> None:
        self.store = store
        self.ledger = ledger or LoanLedger()
        self.editing_loan_id: str | None = None
        self.selected_loan_id: str | None = None

    @classmethod
    def from_config(cls, config: LoanTrackerConfig) -> "LedgerApp":
        """Create an app backed by the configured JSON store."""
        store = JsonLedgerStore(
            config.storage.path,
            key=config.storage.key,
            pretty=config.storage.pretty_json,
        )
        return cls(store, LoanLedger(id_factory=IdFactory(seed=config.seed)))

    def open(self, today: date | None = None) -> None:
        """Load the stored loans and refresh their statuses."""
        self.ledger = LoanLedger.from_loans(self.store.load(), id_factory=self.ledger.id_factory)
        self.ledger.refresh_statuses(today)
        self.editing_loan_id = None
        self.selected_loan_id = None
        logger.info("Opened ledger with %d loans", len(self.ledger.loans))

    @property
    def loans(self) -> list[Loan]:
        return self.ledger.list_loans()

    # --- Selection -------------------------------------------------------

    def start_editing(self, loan_id: str) -> Loan:
        loan = self.ledger.get(loan_id)
        self.editing_loan_id = loan_id
        return loan

    def stop_editing(self) -> None:
        self.editing_loan_id = None

    def select_for_payment(self, loan_id: str) -> Loan:
        loan = self.ledger.get(loan_id)
        self.selected_loan_id = loan_id
        return loan

    def clear_selection(self) -> None:
        self.selected_loan_id = None

    # --- Mutations (each one is saved) -----------------------------------

    def add_loan(self, draft: LoanDraft) -> Loan:
        loan = self.ledger.create(draft)
        self._save()
        return loan

    def update_loan(self, loan: Loan) -> None:
        self.ledger.update(loan)
        self._save()

    def edit_loan(self, loan_id: str, draft: LoanDraft) -> Loan:
        loan = self.ledger.edit(loan_id, draft)
        self._save()
        return loan

    def submit_edit(self, draft: LoanDraft) -> Loan:
        """Apply the edit form to the loan currently being edited."""
        if self.editing_loan_id is None:
            raise ValidationError("No loan is being edited")
        loan = self.edit_loan(self.editing_loan_id, draft)
        self.editing_loan_id = None
        return loan

    def delete_loan(self, loan_id: str) -> Loan:
        loan = self.ledger.delete(loan_id)
        if self.editing_loan_id == loan_id:
            self.editing_loan_id = None
        if self.selected_loan_id == loan_id:
            self.selected_loan_id = None
        self._save()
        return loan

    def add_payment(
        self,
        loan_id: str,
        amount: Decimal,
        paid_on: date | None = None,
        note: str | None = None,
    ) -> PaymentAllocation:
        allocation = self.ledger.record_payment(loan_id, amount, paid_on=paid_on, note=note)
        self._save()
        return allocation

    def pay_installment(self, loan_id: str, installment_id: str, paid_on: date | None = None) -> Payment | None:
        payment = self.ledger.pay_installment(loan_id, installment_id, paid_on=paid_on)
        self._save()
        return payment

    def _save(self) -> None:
        self.store.save(self.ledger.list_loans())
