"""Command-line front end for the loan tracker.

Examples
--------
    loan-tracker add --source "GCash GLoan" --amount 6000 --due-date 2024-01-01 --term 3
    loan-tracker pay 3f2a --amount 2000
    loan-tracker pay-installment 3f2a 2
    loan-tracker list
"""

import argparse
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from loan_tracker import __version__
from loan_tracker.app import LedgerApp
from loan_tracker.config import LoanTrackerConfig
from loan_tracker.exceptions import (
    InstallmentNotFoundError,
    LoanNotFoundError,
    LoanTrackerError,
    ValidationError,
)
from loan_tracker.generators import SampleLoanGenerator
from loan_tracker.logging import get_logger, setup_logging
from loan_tracker.models import PAYMENT_TERMS, Loan, LoanDraft, LoanSource
from loan_tracker.sinks.console import ConsoleSink

logger = get_logger(__name__)


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None


def _date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value!r}") from None


def _add_loan_fields(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument(
        "--source",
        choices=[s.value for s in LoanSource],
        required=required,
        help="Lender or pay-later service",
    )
    parser.add_argument("--product", dest="product_name", help="Product or purchase name")
    parser.add_argument("--amount", type=_decimal_arg, required=required, help="Loan amount")
    parser.add_argument("--due-date", type=_date_arg, required=required, help="First due date (YYYY-MM-DD)")
    parser.add_argument(
        "--term",
        type=int,
        choices=PAYMENT_TERMS,
        required=required,
        help="Payment term in months",
    )
    parser.add_argument("--interest-rate", type=_decimal_arg, help="Interest rate in percent")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="loan-tracker", description="Track loans and their installments")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--store",
        type=Path,
        help="Ledger file (default: $LOAN_TRACKER_STORE or loans.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (default: $LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a loan")
    _add_loan_fields(add, required=True)

    edit = subparsers.add_parser("edit", help="Edit a loan; omitted fields keep their value")
    edit.add_argument("loan_id", help="Loan id or unique id prefix")
    _add_loan_fields(edit, required=False)

    delete = subparsers.add_parser("delete", help="Delete a loan")
    delete.add_argument("loan_id", help="Loan id or unique id prefix")

    pay = subparsers.add_parser("pay", help="Record a lump-sum payment")
    pay.add_argument("loan_id", help="Loan id or unique id prefix")
    pay.add_argument("--amount", type=_decimal_arg, required=True, help="Payment amount")
    pay.add_argument("--date", type=_date_arg, help="Payment date (default: today)")
    pay.add_argument("--note", help="Free-text note")

    pay_installment = subparsers.add_parser("pay-installment", help="Mark one month as paid")
    pay_installment.add_argument("loan_id", help="Loan id or unique id prefix")
    pay_installment.add_argument("month", type=int, help="Installment month number")
    pay_installment.add_argument("--date", type=_date_arg, help="Payment date (default: today)")

    listing = subparsers.add_parser("list", help="Show all loans")
    listing.add_argument("--json", action="store_true", help="Output JSON")

    show = subparsers.add_parser("show", help="Show one loan")
    show.add_argument("loan_id", help="Loan id or unique id prefix")

    subparsers.add_parser("stats", help="Show totals across all loans")

    demo = subparsers.add_parser("demo", help="Add sample loans")
    demo.add_argument("--count", type=int, default=5, help="Number of loans (default: 5)")
    demo.add_argument("--seed", type=int, help="Random seed for reproducibility")

    return parser


def resolve_loan(app: LedgerApp, loan_id: str) -> Loan:
    """Find a loan by full id or unique id prefix."""
    if loan_id in app.ledger.loans:
        return app.ledger.loans[loan_id]

    matches = [loan for loan in app.loans if loan.loan_id.startswith(loan_id)]
    if not matches:
        raise LoanNotFoundError(f"Loan {loan_id} not found")
    if len(matches) > 1:
        raise ValidationError(f"Loan id prefix {loan_id!r} matches {len(matches)} loans")
    return matches[0]


def _cmd_add(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    loan = app.add_loan(
        LoanDraft(
            source=args.source,
            amount=args.amount,
            due_date=args.due_date,
            payment_term=args.term,
            product_name=args.product_name,
            interest_rate=args.interest_rate,
        )
    )
    print(f"Loan added: {loan.loan_id}")
    sink.write_loan(loan)


def _cmd_edit(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    loan = app.start_editing(resolve_loan(app, args.loan_id).loan_id)
    draft = LoanDraft(
        source=args.source or loan.source,
        amount=args.amount if args.amount is not None else loan.amount,
        due_date=args.due_date or loan.due_date,
        payment_term=args.term or loan.payment_term,
        product_name=args.product_name if args.product_name is not None else loan.product_name,
        interest_rate=args.interest_rate if args.interest_rate is not None else loan.interest_rate,
    )
    loan = app.submit_edit(draft)
    print(f"Loan updated: {loan.loan_id}")
    sink.write_loan(loan)


def _cmd_delete(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    loan = app.delete_loan(resolve_loan(app, args.loan_id).loan_id)
    print(f"Loan deleted: {loan.loan_id}")


def _cmd_pay(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    loan = app.select_for_payment(resolve_loan(app, args.loan_id).loan_id)
    allocation = app.add_payment(loan.loan_id, args.amount, paid_on=args.date, note=args.note)
    app.clear_selection()

    money = sink.display.money
    print(f"Payment of {money(allocation.payment.amount)} recorded")
    for installment in allocation.paid_installments:
        print(f"  Month {installment.month} paid")
    if allocation.unapplied > 0:
        print(f"  {money(allocation.unapplied)} carried towards the next installment")
    print(f"Remaining balance: {money(loan.remaining_balance)}")


def _cmd_pay_installment(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    loan = app.select_for_payment(resolve_loan(app, args.loan_id).loan_id)
    installment = next((i for i in loan.installments if i.month == args.month), None)
    if installment is None:
        raise InstallmentNotFoundError(f"Loan {loan.loan_id} has no month {args.month}")

    payment = app.pay_installment(loan.loan_id, installment.installment_id, paid_on=args.date)
    app.clear_selection()

    money = sink.display.money
    if payment is None:
        print(f"Month {installment.month} is already paid")
    else:
        print(f"Month {installment.month} payment of {money(payment.amount)} has been marked as paid")
    print(f"Remaining balance: {money(loan.remaining_balance)}")


def _cmd_list(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    if args.json:
        sink.write_json(app.loans)
    else:
        sink.write_loans(app.loans)


def _cmd_show(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    sink.write_loan(resolve_loan(app, args.loan_id))


def _cmd_stats(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    sink.write_summary(app.ledger.summary())


def _cmd_demo(app: LedgerApp, args: argparse.Namespace, sink: ConsoleSink) -> None:
    generator = SampleLoanGenerator(seed=args.seed)
    for draft in generator.generate_many(args.count):
        loan = app.add_loan(draft)
        print(f"Loan added: {loan.loan_id} ({loan.source}, {sink.display.money(loan.amount)})")


COMMANDS = {
    "add": _cmd_add,
    "edit": _cmd_edit,
    "delete": _cmd_delete,
    "pay": _cmd_pay,
    "pay-installment": _cmd_pay_installment,
    "list": _cmd_list,
    "show": _cmd_show,
    "stats": _cmd_stats,
    "demo": _cmd_demo,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = LoanTrackerConfig.from_env()
    except LoanTrackerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.store is not None:
        config.storage.path = args.store
    if args.log_level is not None:
        config.log_level = args.log_level
    setup_logging(level=config.log_level, format_type=config.log_format)

    app = LedgerApp.from_config(config)
    sink = ConsoleSink(display=config.display, pretty=config.storage.pretty_json)

    try:
        app.open()
        COMMANDS[args.command](app, args, sink)
    except LoanTrackerError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
