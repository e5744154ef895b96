"""PresetStore -- built-in presets plus a best-effort local cache of client presets."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from roicalc.models.enums import PresetCategory
from roicalc.models.preset import Preset
from roicalc.presets.loader import get_default_presets
from roicalc.presets.schema import PresetConfig, PresetFile

logger = logging.getLogger(__name__)


class PresetStore:
    """Serves built-in presets and persists user-saved ones to a JSON file.

    The cache is best effort: an unreadable or invalid file is logged and
    ignored, and a failed write leaves the in-memory copy authoritative.
    """

    def __init__(
        self,
        cache_path: Optional[Path] = None,
        builtins: Optional[list[Preset]] = None,
    ) -> None:
        self._cache_path = cache_path
        self._builtins: dict[str, Preset] = {
            p.id: p for p in (builtins if builtins is not None else get_default_presets())
        }
        self._saved: dict[str, Preset] = self._read()

    def list(self) -> list[Preset]:
        """Built-in presets first, then saved ones in save order."""
        return [*self._builtins.values(), *self._saved.values()]

    def get(self, preset_id: str) -> Optional[Preset]:
        return self._builtins.get(preset_id) or self._saved.get(preset_id)

    def save(self, preset: Preset) -> Preset:
        """Add or overwrite a saved preset. Built-in ids are read-only."""
        if preset.id in self._builtins:
            raise ValueError(f"Preset '{preset.id}' is built in and cannot be overwritten")
        self._saved[preset.id] = preset
        self._write()
        return preset

    def delete(self, preset_id: str) -> bool:
        """Remove a saved preset. Returns False if it did not exist."""
        if preset_id in self._builtins:
            raise ValueError(f"Preset '{preset_id}' is built in and cannot be deleted")
        if self._saved.pop(preset_id, None) is None:
            return False
        self._write()
        return True

    def _read(self) -> dict[str, Preset]:
        if self._cache_path is None or not self._cache_path.exists():
            return {}
        try:
            with open(self._cache_path, "r") as f:
                raw = json.load(f)
            parsed = PresetFile.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable preset cache {self._cache_path}: {e}")
            return {}

        saved: dict[str, Preset] = {}
        for config in parsed.presets:
            if config.id in self._builtins:
                logger.warning(f"Skipping cached preset '{config.id}': id is built in")
                continue
            saved[config.id] = config.to_domain()
        return saved

    def _write(self) -> None:
        if self._cache_path is None:
            return
        payload = PresetFile(
            presets=[PresetConfig.from_domain(p) for p in self._saved.values()]
        )
        try:
            self._cache_path.parent.mkdir(parents=True, exist_ok=True)
            self._cache_path.write_text(payload.model_dump_json(indent=2))
        except OSError as e:
            logger.warning(f"Could not write preset cache {self._cache_path}: {e}")


def client_preset(preset: Preset) -> Preset:
    """Force the client category on a user-saved preset."""
    return replace(preset, category=PresetCategory.CLIENT)
