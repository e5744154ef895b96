"""Load and validate preset files from JSON."""

from __future__ import annotations

import json
from pathlib import Path

from roicalc.models.preset import Preset
from roicalc.presets.schema import PresetFile

# Default directory for bundled preset files
_CONFIG_DIR = Path(__file__).parent / "configs"


def load_presets(file_path: Path | None = None) -> list[Preset]:
    """Load and validate presets from a JSON file.

    If no path is provided, loads the bundled industry presets.
    """
    if file_path is None:
        file_path = _CONFIG_DIR / "default_presets.json"

    if not file_path.exists():
        raise FileNotFoundError(f"Preset file not found: {file_path}")

    with open(file_path, "r") as f:
        raw = json.load(f)

    return [p.to_domain() for p in PresetFile.model_validate(raw).presets]


def get_default_presets() -> list[Preset]:
    """Load the bundled DTC / SaaS / Local Services presets."""
    return load_presets()
