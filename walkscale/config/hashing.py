"""Short stable identifiers for configs and traces."""

import hashlib
import json
from dataclasses import asdict
from typing import Any, Iterable

from walkscale.config.experiment import WalkExperimentParams

DIGEST_CHARS = 16

# Fields that label a trace without changing what gets simulated
DISPLAY_ONLY_FIELDS = ("trace_name",)


def canonical_json(config: Any, drop: Iterable[str] = ()) -> str:
    """Compact key-sorted JSON of a dataclass, minus the top-level keys in drop."""
    fields = asdict(config)
    for key in drop:
        fields.pop(key, None)
    return json.dumps(fields, sort_keys=True, separators=(",", ":"))


def config_hash(config: Any, drop: Iterable[str] = ()) -> str:
    """Hex prefix of the SHA-256 digest of ``canonical_json(config, drop)``."""
    digest = hashlib.sha256(canonical_json(config, drop).encode("utf-8"))
    return digest.hexdigest()[:DIGEST_CHARS]


def trace_id(params: WalkExperimentParams) -> str:
    """Identity of a trace's physics.

    Two traces that differ only in trace_name simulate the same thing and
    share an id.
    """
    return config_hash(params, drop=DISPLAY_ONLY_FIELDS)
