"""Experiment configuration system with frozen, hashable, serializable dataclasses."""

from walkscale.config.experiment import (
    BatchConfig,
    GridType,
    SequenceKind,
    WalkExperimentParams,
    WalkType,
)
from walkscale.config.defaults import DEFAULT_PARAMS
from walkscale.config.hashing import config_hash, trace_id
from walkscale.config.serialization import (
    ConfigError,
    config_from_json,
    config_to_json,
    load_batch_config,
    params_from_dict,
    params_to_dict,
)

__all__ = [
    "BatchConfig",
    "GridType",
    "SequenceKind",
    "WalkExperimentParams",
    "WalkType",
    "DEFAULT_PARAMS",
    "config_hash",
    "trace_id",
    "ConfigError",
    "config_from_json",
    "config_to_json",
    "load_batch_config",
    "params_from_dict",
    "params_to_dict",
]
