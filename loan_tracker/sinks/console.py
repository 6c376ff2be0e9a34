"""Console sink for showing loans and totals."""

import json

from loan_tracker.config import DisplayConfig
from loan_tracker.models import InstallmentStatus, Loan
from loan_tracker.sinks.serialization import to_dict
from loan_tracker.store.ledger import LedgerSummary, loan_progress

_MARKERS = {
    InstallmentStatus.PAID: "[x]",
    InstallmentStatus.OVERDUE: "[!]",
    InstallmentStatus.PENDING: "[ ]",
}


class ConsoleSink:
    """Output loan cards and ledger totals to stdout."""

    def __init__(self, display: DisplayConfig | None = None, pretty: bool = True) -> None:
        """Initialize console sink.

        Parameters
        ----------
        display : DisplayConfig | None
            Currency and date formatting.
        pretty : bool
            Pretty-print JSON output.
        """
        self.display = display or DisplayConfig()
        self.pretty = pretty

    def write_loans(self, loans: list[Loan]) -> None:
        """Print one card per loan."""
        if not loans:
            print("No loans yet. Add one with `loan-tracker add`.")
            return

        for loan in loans:
            self.write_loan(loan)

    def write_loan(self, loan: Loan) -> None:
        """Print a loan card with its installment schedule."""
        money = self.display.money
        title = loan.source if not loan.product_name else f"{loan.source} - {loan.product_name}"

        print(f"\n{'='*60}")
        print(f"{title}  [{loan.status.value.upper()}]")
        print(f"id: {loan.loan_id}")
        print("=" * 60)
        print(f"  Amount:     {money(loan.amount)}")
        print(f"  Remaining:  {money(loan.remaining_balance)}")
        print(f"  Progress:   {loan_progress(loan)}%")
        print(f"  Due:        {loan.due_date.strftime(self.display.date_format)}")
        print(f"  Term:       {loan.payment_term} months at {money(loan.monthly_installment)}")
        if loan.interest_rate is not None:
            print(f"  Interest:   {loan.interest_rate}%")
        if loan.installment_credit > 0:
            print(f"  Credit:     {money(loan.installment_credit)} towards next installment")

        for installment in sorted(loan.installments, key=lambda i: i.month):
            due = installment.due_date.strftime(self.display.date_format)
            print(f"    {_MARKERS[installment.status]} Month {installment.month:>2}  {due}  {money(installment.amount)}")

        if loan.payments:
            print(f"  Payments ({len(loan.payments)}):")
            for payment in loan.payments:
                note = f"  {payment.note}" if payment.note else ""
                print(f"    {payment.date.isoformat()}  {money(payment.amount)}{note}")

    def write_summary(self, summary: LedgerSummary) -> None:
        """Print ledger totals."""
        money = self.display.money
        print(f"\n{'='*60}")
        print("Loan Summary")
        print("=" * 60)
        print(f"  Total Debt:      {money(summary.total_debt)}")
        print(f"  Total Paid:      {money(summary.total_paid)}")
        print(f"  Total Borrowed:  {money(summary.total_borrowed)}")
        print(f"  Active Loans:    {summary.active_loans} of {summary.loan_count}")

    def write_json(self, loans: list[Loan]) -> None:
        """Print loans as a JSON array."""
        data = [to_dict(loan) for loan in loans]
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            print(json.dumps(data, ensure_ascii=False))
