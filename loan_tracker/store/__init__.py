"""In-memory loan ledger."""

from loan_tracker.store.ledger import LedgerSummary, LoanLedger, PaymentAllocation, loan_progress

__all__ = ["LedgerSummary", "LoanLedger", "PaymentAllocation", "loan_progress"]
