import json
import logging
import os
from dataclasses import asdict, fields
from pathlib import Path
from typing import Dict, List, Optional

from .params import LoggingParams, PipelineParams, QuantizeParams

PRESETS_DIR = "presets"


def get_preset_path(preset_name: str, presets_dir: str = PRESETS_DIR) -> Path:
    """Constructs the full path for a given preset name."""
    return Path(presets_dir) / f"{preset_name}.json"


def get_available_presets(presets_dir: str = PRESETS_DIR) -> List[str]:
    """Returns a list of available preset names without the .json extension."""
    if not os.path.exists(presets_dir):
        return []
    return sorted(p.stem for p in Path(presets_dir).glob("*.json") if p.is_file())


def save_preset(
    preset_name: str, params: PipelineParams, presets_dir: str = PRESETS_DIR
) -> Optional[Path]:
    """Saves the parameters to a JSON file and returns its path."""
    if not preset_name:
        return None
    os.makedirs(presets_dir, exist_ok=True)
    filepath = get_preset_path(preset_name, presets_dir)
    with open(filepath, "w") as f:
        json.dump(asdict(params), f, indent=2)
    return filepath


def load_preset(preset_name: str, presets_dir: str = PRESETS_DIR) -> Optional[Dict]:
    """Loads a preset JSON file into a dictionary."""
    filepath = get_preset_path(preset_name, presets_dir)
    if not filepath.exists():
        return None
    with open(filepath, "r") as f:
        return json.load(f)


def _check_field_types(section) -> None:
    for f in fields(section):
        value = getattr(section, f.name)
        expected = type(f.default)
        if type(value) is not expected:
            raise TypeError(
                f"{type(section).__name__}.{f.name} must be {expected.__name__}, got {value!r}"
            )


def params_from_dict(data: Dict) -> PipelineParams:
    """
    Rebuilds PipelineParams from a loaded preset.

    Unknown keys and wrongly typed values raise TypeError; an unknown logging
    level raises ValueError.
    """
    data = dict(data)
    quantize = QuantizeParams(**data.pop("quantize", {}))
    log = LoggingParams(**data.pop("logging", {}))
    params = PipelineParams(quantize=quantize, logging=log, **data)
    _check_field_types(params.quantize)
    _check_field_types(params.logging)
    if not isinstance(logging.getLevelName(params.logging.level), int):
        raise ValueError(f"unknown logging level {params.logging.level}")
    return params
