"""Tests for the experiment configuration system."""

import json

import pytest
from dataclasses import FrozenInstanceError, replace

from walkscale.config import (
    DEFAULT_PARAMS,
    BatchConfig,
    ConfigError,
    GridType,
    SequenceKind,
    WalkExperimentParams,
    WalkType,
    config_from_json,
    config_hash,
    config_to_json,
    load_batch_config,
    params_from_dict,
    params_to_dict,
    trace_id,
)


def _batch(*walks: WalkExperimentParams) -> BatchConfig:
    return BatchConfig(output_name="test_run", walks=walks or (DEFAULT_PARAMS,))


class TestDefaultParams:
    """DEFAULT_PARAMS mirror the interactive defaults."""

    def test_defaults(self):
        assert DEFAULT_PARAMS.walk_type is WalkType.SIMPLE
        assert DEFAULT_PARAMS.grid_type is GridType.SQUARE
        assert DEFAULT_PARAMS.num_walks_coefficient == 20.0
        assert DEFAULT_PARAMS.sequence_kind is SequenceKind.ARITHMETIC
        assert DEFAULT_PARAMS.start_value == 20
        assert DEFAULT_PARAMS.arithmetic_step == 5
        assert DEFAULT_PARAMS.geometric_ratio == 1.1
        assert DEFAULT_PARAMS.step_count == 100
        assert DEFAULT_PARAMS.steps_per_sample is None

    def test_increment_follows_sequence_kind(self):
        assert DEFAULT_PARAMS.increment == 5
        geo = replace(DEFAULT_PARAMS, sequence_kind=SequenceKind.GEOMETRIC)
        assert geo.increment == 1.1

    def test_is_bucketed(self):
        assert not DEFAULT_PARAMS.is_bucketed
        assert replace(DEFAULT_PARAMS, steps_per_sample=10).is_bucketed


class TestImmutability:
    """Frozen dataclasses prevent mutation."""

    def test_params_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_PARAMS.seed = 99  # type: ignore[misc]

    def test_batch_frozen(self):
        batch = _batch()
        with pytest.raises(FrozenInstanceError):
            batch.output_name = "other"  # type: ignore[misc]


class TestValidation:
    """__post_init__ rejects inconsistent parameters."""

    def test_non_positive_coefficient(self):
        with pytest.raises(ValueError, match="num_walks_coefficient"):
            WalkExperimentParams(num_walks_coefficient=0.0)

    def test_zero_buckets(self):
        with pytest.raises(ValueError, match="step_count"):
            WalkExperimentParams(step_count=0)

    def test_zero_start(self):
        with pytest.raises(ValueError, match="start_value"):
            WalkExperimentParams(start_value=0)

    def test_zero_steps_per_sample(self):
        with pytest.raises(ValueError, match="steps_per_sample"):
            WalkExperimentParams(steps_per_sample=0)

    def test_non_positive_ratio(self):
        with pytest.raises(ValueError, match="geometric_ratio"):
            WalkExperimentParams(
                sequence_kind=SequenceKind.GEOMETRIC, geometric_ratio=0.0
            )

    def test_geometric_sweep_overflowing_float(self):
        with pytest.raises(ValueError, match="overflows"):
            WalkExperimentParams(
                sequence_kind=SequenceKind.GEOMETRIC, start_value=10,
                geometric_ratio=10.0, step_count=400,
            )

    def test_long_geometric_sweep_within_range(self):
        params = WalkExperimentParams(
            sequence_kind=SequenceKind.GEOMETRIC, geometric_ratio=1.1, step_count=400,
        )
        assert params.step_count == 400

    def test_ratio_ignored_for_arithmetic(self):
        params = WalkExperimentParams(geometric_ratio=-1.0)
        assert params.increment == 5

    def test_arithmetic_sweep_going_non_positive(self):
        with pytest.raises(ValueError, match="arithmetic_step"):
            WalkExperimentParams(start_value=10, arithmetic_step=-5, step_count=3)

    def test_decreasing_arithmetic_sweep_allowed_while_positive(self):
        params = WalkExperimentParams(start_value=10, arithmetic_step=-3, step_count=4)
        assert params.step_count == 4

    def test_empty_output_name(self):
        with pytest.raises(ValueError, match="output_name"):
            BatchConfig(output_name="  ", walks=(DEFAULT_PARAMS,))

    def test_empty_walks(self):
        with pytest.raises(ValueError, match="walks"):
            BatchConfig(output_name="run", walks=())


class TestRoundTrip:
    """JSON serialization round-trip preserves identity."""

    def test_batch_round_trip(self):
        batch = _batch(
            replace(DEFAULT_PARAMS, trace_name="a"),
            replace(
                DEFAULT_PARAMS,
                trace_name="b",
                walk_type=WalkType.NO_IMMEDIATE_RETURN,
                grid_type=GridType.HEXAGONAL,
                sequence_kind=SequenceKind.GEOMETRIC,
                steps_per_sample=25,
            ),
        )
        restored = config_from_json(config_to_json(batch))
        assert restored == batch
        assert config_hash(restored) == config_hash(batch)

    def test_enums_serialize_as_values(self):
        d = params_to_dict(replace(DEFAULT_PARAMS, grid_type=GridType.TRIANGULAR))
        assert d["grid_type"] == "triangular"
        assert d["walk_type"] == "simple"
        assert d["sequence_kind"] == "arithmetic"

    def test_json_is_sorted_and_indented(self):
        text = config_to_json(_batch())
        data = json.loads(text)
        assert list(data) == sorted(data)
        assert "\n  " in text

    def test_integer_coefficient_accepted(self):
        d = params_to_dict(DEFAULT_PARAMS)
        d["num_walks_coefficient"] = 20
        params = params_from_dict(d)
        assert params.num_walks_coefficient == 20.0
        assert isinstance(params.num_walks_coefficient, float)

    def test_missing_fields_take_defaults(self):
        params = params_from_dict({"trace_name": "only name"})
        assert params == replace(DEFAULT_PARAMS, trace_name="only name")


class TestHashing:
    """Config hashes are deterministic and name-independent for traces."""

    def test_hash_length_and_determinism(self):
        h = config_hash(DEFAULT_PARAMS)
        assert len(h) == 16
        assert h == config_hash(replace(DEFAULT_PARAMS))

    def test_hash_changes_with_physics(self):
        assert config_hash(DEFAULT_PARAMS) != config_hash(replace(DEFAULT_PARAMS, seed=1))

    def test_trace_id_ignores_name(self):
        a = replace(DEFAULT_PARAMS, trace_name="first")
        b = replace(DEFAULT_PARAMS, trace_name="second")
        assert config_hash(a) != config_hash(b)
        assert trace_id(a) == trace_id(b)


class TestLoadBatchConfig:
    """load_batch_config wraps every failure in ConfigError."""

    def test_loads_valid_file(self, tmp_path):
        path = tmp_path / "batch.json"
        batch = _batch(replace(DEFAULT_PARAMS, trace_name="t"))
        path.write_text(config_to_json(batch))
        assert load_batch_config(path) == batch

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Could not read"):
            load_batch_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_batch_config(path)

    def test_top_level_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="must be a JSON object"):
            load_batch_config(path)

    def test_overflowing_sweep_rejected_at_load(self, tmp_path):
        data = json.loads(config_to_json(_batch()))
        data["walks"][0].update(
            sequence_kind="geometric", start_value=10, geometric_ratio=10.0, step_count=400,
        )
        path = tmp_path / "overflow.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError, match="overflows"):
            load_batch_config(path)

    def test_unknown_key_rejected(self, tmp_path):
        data = json.loads(config_to_json(_batch()))
        data["walks"][0]["temperature"] = 3
        path = tmp_path / "extra.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError, match="Invalid config"):
            load_batch_config(path)

    def test_unknown_enum_value_rejected(self, tmp_path):
        data = json.loads(config_to_json(_batch()))
        data["walks"][0]["grid_type"] = "cubic"
        path = tmp_path / "enum.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError):
            load_batch_config(path)

    def test_wrong_type_rejected(self, tmp_path):
        data = json.loads(config_to_json(_batch()))
        data["walks"][0]["seed"] = "forty-two"
        path = tmp_path / "type.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError):
            load_batch_config(path)

    def test_validation_error_wrapped(self, tmp_path):
        data = json.loads(config_to_json(_batch()))
        data["walks"][0]["step_count"] = 0
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError, match="step_count"):
            load_batch_config(path)

    def test_example_config_loads(self):
        from pathlib import Path

        path = Path(__file__).parent.parent / "configs" / "example_batch.json"
        batch = load_batch_config(path)
        assert batch.output_name == "square_vs_triangular"
        assert len(batch.walks) == 3
        assert batch.walks[2].steps_per_sample == 50
