"""
Instrument loader - discovers and loads tuning presets.

Instruments can come from:
1. Built-in library (shipped with package)
2. Project instruments (user's project/instruments directory)
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from chuk_mcp_chordscope.constants import ErrorMessages
from chuk_mcp_chordscope.models.instrument import Instrument, InstrumentMetadata

logger = logging.getLogger(__name__)

DEFAULT_INSTRUMENT = "guitar-standard"


class InstrumentLoader:
    """
    Discovers and loads instrument definitions.

    Instruments are loaded from YAML files in the library and project
    directories. Project instruments override library instruments with
    the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the instrument loader.

        Args:
            library_path: Path to built-in instrument library
            project_path: Path to project instruments directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Instrument] = {}

    def list_instruments(self) -> list[InstrumentMetadata]:
        """
        List all available instruments, sorted by name.

        Project instruments take precedence over library instruments.
        """
        instruments: dict[str, InstrumentMetadata] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                instrument = self._load_instrument_file(path)
                if instrument:
                    instruments[instrument.name] = InstrumentMetadata.from_instrument(instrument)

        return [instruments[name] for name in sorted(instruments)]

    def get_instrument(self, name: str) -> Instrument | None:
        """
        Get an instrument by name.

        Args:
            name: Instrument name (e.g., 'bass-5')

        Returns:
            Instrument if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        candidates = []
        if self.project_path:
            candidates.append(self.project_path / f"{name}.yaml")
        candidates.append(self.library_path / f"{name}.yaml")

        for path in candidates:
            if path.exists():
                instrument = self._load_instrument_file(path)
                if instrument:
                    self._cache[name] = instrument
                    return instrument

        return None

    def require_instrument(self, name: str) -> Instrument:
        """
        Get an instrument by name, failing if it does not exist.

        Raises:
            ValueError: If no instrument has that name
        """
        instrument = self.get_instrument(name)
        if instrument is None:
            raise ValueError(ErrorMessages.INSTRUMENT_NOT_FOUND.format(name=name))
        return instrument

    def save_to_project(self, instrument: Instrument) -> Path:
        """
        Save a custom instrument to the project directory.

        Args:
            instrument: The instrument to save

        Returns:
            Path to the written YAML file
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        self.project_path.mkdir(parents=True, exist_ok=True)
        path = self.project_path / f"{instrument.name}.yaml"
        path.write_text(
            yaml.safe_dump(instrument.to_yaml_dict(), default_flow_style=None, sort_keys=False)
        )

        self._cache.pop(instrument.name, None)
        return path

    def _load_instrument_file(self, path: Path) -> Instrument | None:
        """Load an instrument from a YAML file; unreadable presets are skipped."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            return Instrument.from_yaml_dict(data)
        except (
            OSError,
            yaml.YAMLError,
            ValidationError,
            ValueError,
            KeyError,
            TypeError,
            AttributeError,
        ):
            logger.warning(f"Skipping invalid instrument file: {path}", exc_info=True)
            return None

    def clear_cache(self) -> None:
        """Clear the instrument cache."""
        self._cache.clear()
