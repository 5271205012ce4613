"""JSON-backed seed dataset adapter."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from carverse.application.dtos.car import CarDraft
from carverse.application.ports.seed_dataset import SeedDataset
from carverse.infrastructure.logging.logger import logger


class JsonSeedDataset(SeedDataset):
    """JSON file implementation of the seed dataset."""

    def __init__(self, json_path: Optional[str] = None) -> None:
        """
        Initialize JSON seed dataset.

        Args:
            json_path: Path to a JSON array of cars. Defaults to the bundled
                carverse/data/seed_cars.json.
        """
        if not json_path:
            package_root = Path(__file__).parent.parent.parent.parent
            json_path = str(package_root / "data" / "seed_cars.json")
        self._json_path = json_path

    def _map_entry_to_draft(self, index: int, entry: Any) -> Optional[CarDraft]:
        """
        Map one JSON entry to a CarDraft.

        Args:
            index: Position in the file (for logging)
            entry: Decoded JSON value

        Returns:
            CarDraft, or None if the entry is invalid
        """
        if not isinstance(entry, dict):
            logger.warning(f"Skipping seed entry {index}: expected an object")
            return None
        try:
            return CarDraft.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Skipping seed entry {index}: {e.error_count()} validation error(s)")
            return None

    def load(self) -> list[CarDraft]:
        """
        Load and validate the dataset.

        Returns:
            Valid car drafts in file order

        Raises:
            FileNotFoundError: If the dataset file does not exist
            ValueError: If the file is not a JSON array
        """
        if not os.path.exists(self._json_path):
            raise FileNotFoundError(f"Seed dataset not found: {self._json_path}")

        with open(self._json_path, "r", encoding="utf-8") as file:
            entries = json.load(file)

        if not isinstance(entries, list):
            raise ValueError(f"Seed dataset must be a JSON array: {self._json_path}")

        drafts = []
        for index, entry in enumerate(entries):
            draft = self._map_entry_to_draft(index, entry)
            if draft:
                drafts.append(draft)
        return drafts
