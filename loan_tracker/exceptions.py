"""Custom exception hierarchy for loan-tracker."""


class LoanTrackerError(Exception):
    """Base exception for all loan-tracker errors."""


class EntityNotFoundError(LoanTrackerError):
    """Raised when a referenced entity does not exist."""


class LoanNotFoundError(EntityNotFoundError):
    """Raised when no loan matches the given id."""


class InstallmentNotFoundError(EntityNotFoundError):
    """Raised when a loan has no installment with the given id."""


class ValidationError(LoanTrackerError):
    """Raised when user input is missing or out of range."""


class InvalidPaymentError(ValidationError):
    """Raised when a payment amount is non-positive or exceeds the balance."""


class ConfigurationError(LoanTrackerError):
    """Raised when configuration is invalid or missing."""


class StorageError(LoanTrackerError):
    """Raised when the persisted ledger cannot be read or written."""
