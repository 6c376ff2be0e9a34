"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from loan_tracker.generators.base import IdFactory
from loan_tracker.models import Loan, LoanDraft
from loan_tracker.store.ledger import LoanLedger


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Reference date before every due date used in the tests."""
    return date(2023, 12, 15)


@pytest.fixture
def ledger(seed: int) -> LoanLedger:
    """Create a fresh ledger with reproducible ids."""
    return LoanLedger(id_factory=IdFactory(seed=seed))


@pytest.fixture
def sample_draft() -> LoanDraft:
    """6000 over 3 months starting 2024-01-01."""
    return LoanDraft(
        source="GCash GLoan",
        amount=Decimal("6000"),
        due_date=date(2024, 1, 1),
        payment_term=3,
        product_name="Phone",
    )


@pytest.fixture
def sample_loan(ledger: LoanLedger, sample_draft: LoanDraft, today: date) -> Loan:
    """The sample draft stored in the ledger."""
    return ledger.create(sample_draft, today=today)
