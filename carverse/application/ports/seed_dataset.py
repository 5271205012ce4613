"""Seed dataset port."""

from abc import ABC, abstractmethod

from carverse.application.dtos.car import CarDraft


class SeedDataset(ABC):
    """Port interface for the static catalog dataset."""

    @abstractmethod
    def load(self) -> list[CarDraft]:
        """
        Load the dataset.

        Returns:
            Validated car drafts
        """
        pass
