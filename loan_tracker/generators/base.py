"""Base generator class and id factory."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class IdFactory:
    """Issue unique entity ids.

    Parameters
    ----------
    seed : int | None
        Seed for reproducible id sequences (tests, demo data).
    """

    def __init__(self, seed: int | None = None) -> None:
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)

    def new_id(self) -> str:
        """Return a fresh UUID4 string."""
        return self.fake.uuid4()


class BaseGenerator(ABC):
    """Base class for sample data generators.

    Provides common initialization: Faker instance creation and
    seed-based reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_PH``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_PH") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)
