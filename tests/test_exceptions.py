"""Tests for custom exception hierarchy."""

from loan_tracker.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InstallmentNotFoundError,
    InvalidPaymentError,
    LoanNotFoundError,
    LoanTrackerError,
    StorageError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_tracker_error_is_exception(self) -> None:
        assert isinstance(LoanTrackerError("test"), Exception)

    def test_not_found_errors(self) -> None:
        for cls in (LoanNotFoundError, InstallmentNotFoundError):
            err = cls("test")
            assert isinstance(err, EntityNotFoundError)
            assert isinstance(err, LoanTrackerError)

    def test_invalid_payment_is_validation_error(self) -> None:
        err = InvalidPaymentError("test")
        assert isinstance(err, ValidationError)
        assert isinstance(err, LoanTrackerError)

    def test_configuration_error_is_loan_tracker_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanTrackerError)

    def test_storage_error_is_loan_tracker_error(self) -> None:
        assert isinstance(StorageError("test"), LoanTrackerError)

    def test_exception_message(self) -> None:
        err = LoanNotFoundError("Loan loan-001 not found")
        assert str(err) == "Loan loan-001 not found"
