"""JSON serialization and deserialization for experiment configs."""

import json
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

from dacite import DaciteError, from_dict, Config as DaciteConfig

from walkscale.config.experiment import BatchConfig, WalkExperimentParams


class ConfigError(Exception):
    """Raised when a batch configuration is missing or malformed."""


# Enums travel as their string values; JSON integers are accepted for floats.
_DACITE_CONFIG = DaciteConfig(
    cast=[tuple, Enum, float],
    check_types=True,
    strict=True,
)


def _to_plain(obj: Any) -> dict[str, Any]:
    # str-valued enums encode as their values
    return json.loads(json.dumps(asdict(obj)))


def params_to_dict(params: WalkExperimentParams) -> dict[str, Any]:
    """Convert params to a plain JSON-compatible dictionary."""
    return _to_plain(params)


def params_from_dict(d: dict[str, Any]) -> WalkExperimentParams:
    """Reconstruct WalkExperimentParams from a plain dictionary."""
    return from_dict(data_class=WalkExperimentParams, data=d, config=_DACITE_CONFIG)


def config_to_json(config: BatchConfig) -> str:
    """Serialize a BatchConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(_to_plain(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> BatchConfig:
    """Deserialize a JSON string to a BatchConfig.

    Uses dacite with strict=True to reject unknown keys (catches schema drift)
    and casts JSON arrays to tuples and strings to the walk/grid/sequence enums.

    Raises:
        ConfigError: If the top-level JSON value is not an object.
    """
    data = json.loads(json_str)
    if not isinstance(data, dict):
        raise ConfigError(
            f"Batch config must be a JSON object, got {type(data).__name__}"
        )
    return from_dict(data_class=BatchConfig, data=data, config=_DACITE_CONFIG)


def load_batch_config(path: str | Path) -> BatchConfig:
    """Load and validate a batch configuration file.

    Raises:
        ConfigError: If the file is missing, is not valid JSON, does not
            match the schema, or fails cross-parameter validation.
    """
    path = Path(path)
    try:
        json_str = path.read_text()
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    try:
        return config_from_json(json_str)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
    except (ConfigError, DaciteError, ValueError) as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e
