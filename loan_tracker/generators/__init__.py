"""Id and sample data generators."""

from loan_tracker.generators.base import BaseGenerator, IdFactory
from loan_tracker.generators.loan import SampleLoanGenerator

__all__ = ["BaseGenerator", "IdFactory", "SampleLoanGenerator"]
