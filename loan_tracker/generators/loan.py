"""Sample loan generator for demo ledgers."""

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from loan_tracker.generators.base import BaseGenerator
from loan_tracker.models import PAYMENT_TERMS, LoanDraft, LoanSource


class SampleLoanGenerator(BaseGenerator):
    """Generate realistic loan drafts for demos and manual testing."""

    SOURCES = list(LoanSource)

    # Typical principal range per source, in hundreds
    AMOUNT_RANGES = {
        LoanSource.SHOPEE_PAYLATER: (10, 150),
        LoanSource.GCASH_GLOAN: (20, 250),
        LoanSource.GRABPAY_PAYLATER: (10, 100),
        LoanSource.BILLEASE: (20, 300),
        LoanSource.CASHALO: (20, 200),
        LoanSource.HOME_CREDIT: (50, 500),
        LoanSource.OTHER: (10, 500),
    }

    def generate(self, today: date | None = None) -> LoanDraft:
        """Generate one loan draft.

        Parameters
        ----------
        today : date | None
            Reference date; the first due date falls within 60 days of it.

        Returns
        -------
        LoanDraft
            Draft ready for ``LoanLedger.create``.
        """
        today = today or date.today()
        source = random.choice(self.SOURCES)
        low, high = self.AMOUNT_RANGES[source]

        has_interest = random.random() < 0.5
        return LoanDraft(
            source=source.value,
            amount=Decimal(random.randint(low, high) * 100),
            due_date=today + timedelta(days=random.randint(1, 60)),
            payment_term=random.choice(PAYMENT_TERMS),
            product_name=self.fake.word().title() if random.random() < 0.7 else None,
            interest_rate=Decimal(str(round(random.uniform(0.5, 6.0), 1))) if has_interest else None,
        )

    def generate_many(self, count: int, today: date | None = None) -> Iterator[LoanDraft]:
        """Yield ``count`` loan drafts."""
        for _ in range(count):
            yield self.generate(today)
