# ABOUTME: Named test data loader for browser specs
# ABOUTME: Reads JSON, YAML or text fixtures from the fixtures folder on every call

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

logger = logging.getLogger(__name__)

FIXTURE_EXTENSIONS = (".json", ".yaml", ".yml", ".txt")


class FixtureNotFoundError(FileNotFoundError):
    """Raised when no fixture file matches the requested name."""


class FixtureLoader:
    """Loads named fixture files from a folder.

    Nothing is cached: each call to ``load`` reads the file again, so a
    fixture edited between two checks is picked up by the second one.
    """

    def __init__(self, folder: Union[str, Path]):
        self.folder = Path(folder)

    def resolve(self, name: str) -> Path:
        """
        Find the file backing a fixture name.

        Args:
            name: Fixture name, with or without extension (e.g. "texts")

        Returns:
            Path of the first existing candidate

        Raises:
            FixtureNotFoundError: If no candidate file exists
        """
        explicit = self.folder / name
        if explicit.suffix in FIXTURE_EXTENSIONS and explicit.is_file():
            return explicit

        for extension in FIXTURE_EXTENSIONS:
            candidate = self.folder / f"{name}{extension}"
            if candidate.is_file():
                return candidate

        raise FixtureNotFoundError(
            f"No fixture named {name!r} in {self.folder} (tried {', '.join(FIXTURE_EXTENSIONS)})"
        )

    def load(self, name: str) -> Any:
        """Load and parse a fixture by name."""
        path = self.resolve(name)
        logger.info(f"Loading fixture {name!r} from {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f)
            if path.suffix in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return f.read()
