"""Tests for id and sample loan generators."""

from datetime import date, timedelta
from decimal import Decimal

from loan_tracker.generators import IdFactory, SampleLoanGenerator
from loan_tracker.models import PAYMENT_TERMS, LoanSource
from loan_tracker.store.ledger import LoanLedger


class TestIdFactory:
    """Tests for IdFactory."""

    def test_ids_are_unique(self) -> None:
        factory = IdFactory()
        ids = {factory.new_id() for _ in range(100)}
        assert len(ids) == 100

    def test_seeded_ids_reproducible(self, seed: int) -> None:
        a = IdFactory(seed=seed)
        b = IdFactory(seed=seed)
        assert [a.new_id() for _ in range(3)] == [b.new_id() for _ in range(3)]

    def test_id_is_uuid_string(self) -> None:
        new_id = IdFactory().new_id()
        assert isinstance(new_id, str)
        assert len(new_id) == 36


class TestSampleLoanGenerator:
    """Tests for SampleLoanGenerator."""

    def test_generate_valid_draft(self, seed: int) -> None:
        today = date(2024, 6, 1)
        draft = SampleLoanGenerator(seed=seed).generate(today)

        assert draft.source in {s.value for s in LoanSource}
        assert draft.payment_term in PAYMENT_TERMS
        assert draft.amount >= Decimal("1000")
        assert draft.amount % 100 == 0
        assert today < draft.due_date <= today + timedelta(days=60)

    def test_amount_within_source_range(self, seed: int) -> None:
        generator = SampleLoanGenerator(seed=seed)
        for draft in generator.generate_many(50):
            low, high = SampleLoanGenerator.AMOUNT_RANGES[LoanSource(draft.source)]
            assert low * 100 <= draft.amount <= high * 100

    def test_generate_many_count(self, seed: int) -> None:
        drafts = list(SampleLoanGenerator(seed=seed).generate_many(7))
        assert len(drafts) == 7

    def test_reproducible(self, seed: int) -> None:
        today = date(2024, 6, 1)
        a = list(SampleLoanGenerator(seed=seed).generate_many(5, today))
        b = list(SampleLoanGenerator(seed=seed).generate_many(5, today))
        assert a == b

    def test_drafts_accepted_by_ledger(self, ledger: LoanLedger, seed: int) -> None:
        for draft in SampleLoanGenerator(seed=seed).generate_many(20):
            ledger.create(draft)

        assert len(ledger.loans) == 20
