"""Enumeration types for loan-tracker entities."""

from enum import Enum


class LoanSource(str, Enum):
    SHOPEE_PAYLATER = "Shopee PayLater"
    GCASH_GLOAN = "GCash GLoan"
    GRABPAY_PAYLATER = "GrabPay PayLater"
    BILLEASE = "BillEase"
    CASHALO = "Cashalo"
    HOME_CREDIT = "Home Credit"
    OTHER = "Other"


class LoanStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"
    OVERDUE = "overdue"


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


# Supported payment terms, in months
PAYMENT_TERMS = (1, 3, 6, 12)
