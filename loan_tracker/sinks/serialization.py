"""Conversion between loan dataclasses and JSON-compatible dicts."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from loan_tracker.exceptions import StorageError
from loan_tracker.models import Installment, InstallmentStatus, Loan, LoanStatus, Payment


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def _decimal(value: Any) -> Decimal:
    # str() first so floats written by older versions keep their printed value
    return Decimal(str(value))


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else _decimal(value)


def _date(value: Any) -> date:
    # Accept full timestamps too; the date part is what matters
    return date.fromisoformat(str(value)[:10])


def _optional_date(value: Any) -> date | None:
    return None if value is None else _date(value)


def installment_from_dict(data: dict) -> Installment:
    """Rebuild an Installment from its serialized form."""
    return Installment(
        installment_id=str(data["installment_id"]),
        month=int(data["month"]),
        amount=_decimal(data["amount"]),
        due_date=_date(data["due_date"]),
        status=InstallmentStatus(data.get("status", InstallmentStatus.PENDING.value)),
        paid_date=_optional_date(data.get("paid_date")),
    )


def payment_from_dict(data: dict) -> Payment:
    """Rebuild a Payment from its serialized form."""
    return Payment(
        payment_id=str(data["payment_id"]),
        amount=_decimal(data["amount"]),
        date=_date(data["date"]),
        note=data.get("note"),
        installment_id=data.get("installment_id"),
    )


def loan_from_dict(data: dict) -> Loan:
    """Rebuild a Loan from its serialized form.

    Records written without an interest rate, installment schedule or
    payment list load with those fields empty.

    Raises
    ------
    StorageError
        If a required field is missing or holds an invalid value.
    """
    if not isinstance(data, dict):
        raise StorageError(f"Loan record must be an object, got {type(data).__name__}")
    try:
        amount = _decimal(data["amount"])
        return Loan(
            loan_id=str(data["loan_id"]),
            source=str(data["source"]),
            amount=amount,
            remaining_balance=_decimal(data.get("remaining_balance", amount)),
            due_date=_date(data["due_date"]),
            payment_term=int(data["payment_term"]),
            monthly_installment=_decimal(data.get("monthly_installment", amount)),
            status=LoanStatus(data.get("status", LoanStatus.ACTIVE.value)),
            created_at=datetime.fromisoformat(data["created_at"]),
            product_name=data.get("product_name"),
            interest_rate=_optional_decimal(data.get("interest_rate")),
            installments=[installment_from_dict(i) for i in data.get("installments") or []],
            payments=[payment_from_dict(p) for p in data.get("payments") or []],
            installment_credit=_decimal(data.get("installment_credit", "0")),
        )
    except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise StorageError(f"Malformed loan record {data.get('loan_id', '?')!r}: {e!r}") from e
