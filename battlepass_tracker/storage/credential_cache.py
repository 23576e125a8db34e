"""YAML file cache for resolved credentials."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from battlepass_tracker.logging import get_logger
from battlepass_tracker.models import CredentialBundle


class CredentialCache:
    """Single on-disk record of the last resolved credential bundle.

    The cache has three operations: ``load`` returns whatever usable fields the
    record holds (or ``None`` when there is nothing), ``save`` overwrites the
    record with a full bundle and ``clear`` truncates it.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)
        self._logger = get_logger(__name__).bind(component="credential_cache", path=str(self._path))

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, str] | None:
        """Return cached fields keyed by bundle field name, or ``None`` if absent."""
        if not self._path.exists():
            self._logger.debug("credential_cache_absent")
            return None

        try:
            data: Any = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            self._logger.warning("credential_cache_unreadable", error=str(exc))
            return None

        if not isinstance(data, dict):
            self._logger.debug("credential_cache_empty")
            return None

        fields = CredentialBundle.from_cache(data)
        self._logger.debug("credential_cache_loaded", fields=sorted(fields))
        return fields

    def save(self, bundle: CredentialBundle) -> None:
        """Overwrite the record with ``bundle``."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            yaml.safe_dump(bundle.to_cache(), f, default_flow_style=False, sort_keys=False)
        self._logger.info("credential_cache_saved")

    def clear(self) -> None:
        """Truncate the record so the next load resolves everything fresh."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text("", encoding="utf-8")
        self._logger.info("credential_cache_cleared")
