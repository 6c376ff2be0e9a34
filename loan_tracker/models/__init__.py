"""Domain models for loan tracking."""

from loan_tracker.models.enums import PAYMENT_TERMS, InstallmentStatus, LoanSource, LoanStatus
from loan_tracker.models.loan import Installment, Loan, LoanDraft, Payment

__all__ = [
    "Installment",
    "InstallmentStatus",
    "Loan",
    "LoanDraft",
    "LoanSource",
    "LoanStatus",
    "PAYMENT_TERMS",
    "Payment",
]
