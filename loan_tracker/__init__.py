"""Personal loan tracker with installment schedules and local JSON storage."""

__version__ = "0.1.0"
