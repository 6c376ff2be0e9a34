"""Tests for serialization of loans."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

import pytest

from loan_tracker.exceptions import StorageError
from loan_tracker.models import InstallmentStatus, Loan, LoanStatus
from loan_tracker.sinks.serialization import (
    dataclass_to_dict,
    loan_from_dict,
    serialize_value,
    to_dict,
)
from loan_tracker.store.ledger import LoanLedger


class _SampleEnum(str, Enum):
    VALUE_A = "VALUE_A"


@dataclass
class _SampleData:
    name: str
    amount: Decimal
    created_at: datetime


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        obj = _SampleData(name="test", amount=Decimal("100.50"), created_at=datetime(2024, 1, 1))
        result = to_dict(obj)
        assert result["name"] == "test"
        assert result["amount"] == "100.50"
        assert result["created_at"] == "2024-01-01T00:00:00"

    def test_dict_passthrough(self) -> None:
        d = {"key": "value"}
        assert to_dict(d) == d

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal(self) -> None:
        assert serialize_value(Decimal("99.99")) == "99.99"

    def test_date(self) -> None:
        assert serialize_value(date(2024, 6, 15)) == "2024-06-15"

    def test_enum(self) -> None:
        assert serialize_value(_SampleEnum.VALUE_A) == "VALUE_A"
        assert serialize_value(LoanStatus.PAID) == "paid"

    def test_list_and_nested_dict(self) -> None:
        data = {"amounts": [Decimal("10.00")], "info": {"date": date(2024, 1, 1)}}
        assert serialize_value(data) == {"amounts": ["10.00"], "info": {"date": "2024-01-01"}}

    def test_none_passthrough(self) -> None:
        assert serialize_value(None) is None


class TestLoanRoundTrip:
    """Serialized loans load back equal to the original."""

    def test_round_trip_with_payments(self, ledger: LoanLedger, sample_loan: Loan, today: date) -> None:
        ledger.record_payment(sample_loan.loan_id, Decimal("2500"), paid_on=date(2024, 1, 1), note="gcash", today=today)
        ledger.pay_installment(sample_loan.loan_id, sample_loan.installments[2].installment_id, today=today)

        restored = [loan_from_dict(dataclass_to_dict(loan)) for loan in ledger.list_loans()]

        assert restored == ledger.list_loans()

    def test_serialized_shape(self, sample_loan: Loan) -> None:
        data = dataclass_to_dict(sample_loan)

        assert data["amount"] == "6000"
        assert data["status"] == "active"
        assert data["due_date"] == "2024-01-01"
        assert data["installments"][0]["status"] == "pending"
        assert data["payments"] == []


class TestLoanFromDict:
    """Tests for loading stored loan records."""

    @pytest.fixture
    def minimal_record(self) -> dict:
        """Record from a version without interest rate, schedule or payments."""
        return {
            "loan_id": "1700000000000",
            "source": "Cashalo",
            "amount": 5000,
            "remaining_balance": 5000,
            "due_date": "2024-03-01",
            "payment_term": 1,
            "status": "active",
            "created_at": "2024-02-01T08:30:00",
        }

    def test_subset_schema(self, minimal_record: dict) -> None:
        loan = loan_from_dict(minimal_record)

        assert loan.amount == Decimal("5000")
        assert loan.interest_rate is None
        assert loan.installments == []
        assert loan.payments == []
        assert loan.installment_credit == Decimal("0")
        assert loan.monthly_installment == Decimal("5000")

    def test_float_amounts_keep_printed_value(self, minimal_record: dict) -> None:
        minimal_record["remaining_balance"] = 1234.56
        assert loan_from_dict(minimal_record).remaining_balance == Decimal("1234.56")

    def test_timestamp_due_date(self, minimal_record: dict) -> None:
        minimal_record["due_date"] = "2024-03-01T00:00:00.000Z"
        assert loan_from_dict(minimal_record).due_date == date(2024, 3, 1)

    def test_installment_defaults(self, minimal_record: dict) -> None:
        minimal_record["installments"] = [
            {"installment_id": "i1", "month": 1, "amount": "5000", "due_date": "2024-03-01"}
        ]
        installment = loan_from_dict(minimal_record).installments[0]

        assert installment.status == InstallmentStatus.PENDING
        assert installment.paid_date is None

    @pytest.mark.parametrize(
        "field, value",
        [
            ("amount", "lots"),
            ("due_date", "soon"),
            ("status", "closed"),
            ("payment_term", None),
        ],
    )
    def test_invalid_values(self, minimal_record: dict, field: str, value) -> None:
        minimal_record[field] = value
        with pytest.raises(StorageError, match="Malformed loan record"):
            loan_from_dict(minimal_record)

    def test_missing_field(self, minimal_record: dict) -> None:
        del minimal_record["source"]
        with pytest.raises(StorageError, match="1700000000000"):
            loan_from_dict(minimal_record)

    def test_not_an_object(self) -> None:
        with pytest.raises(StorageError, match="must be an object"):
            loan_from_dict(["not", "a", "dict"])
