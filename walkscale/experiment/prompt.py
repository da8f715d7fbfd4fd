"""Interactive parameter prompting.

Every prompt shows the current value and keeps it on empty input, so the
answers for one trace become the defaults for the next. Enum prompts accept
the numeric code shown in the menu, the value, or the member name.
"""

from dataclasses import replace
from enum import Enum
from typing import Callable, TypeVar

import numpy as np

from walkscale.config.experiment import (
    GridType,
    SequenceKind,
    WalkExperimentParams,
    WalkType,
)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

Reader = Callable[[str], str]
Echo = Callable[[str], None]

_ENUM_DESCRIPTIONS: dict[Enum, str] = {
    WalkType.SIMPLE: "Simple walk",
    WalkType.NO_IMMEDIATE_RETURN: "No immediate returns",
    GridType.SQUARE: "Square grid",
    GridType.TRIANGULAR: "Triangular grid",
    GridType.HEXAGONAL: "Hexagonal grid",
    SequenceKind.ARITHMETIC: "Arithmetic",
    SequenceKind.GEOMETRIC: "Geometric",
}


def random_seed() -> int:
    """Fresh seed for an interactive session."""
    return int(np.random.default_rng().integers(0, 2**31))


def enum_menu(enum_cls: type[Enum]) -> list[str]:
    """Menu lines 'code - description' for an enum."""
    return [
        f"{i} - {_ENUM_DESCRIPTIONS.get(member, member.value)}"
        for i, member in enumerate(enum_cls)
    ]


def enum_parser(enum_cls: type[E]) -> Callable[[str], E]:
    """Parser accepting a menu code, a value, or a member name."""
    members = list(enum_cls)

    def parse(raw: str) -> E:
        text = raw.strip()
        if text.isdigit():
            index = int(text)
            if index < len(members):
                return members[index]
        lowered = text.lower()
        for member in members:
            if lowered in (member.value, member.name.lower()):
                return member
        raise ValueError(f"expected one of 0-{len(members) - 1}")

    return parse


def optional_positive_int(raw: str) -> int | None:
    """Parse steps-per-sample: 0 turns bucketed sampling off."""
    value = int(raw)
    if value < 0:
        raise ValueError("must be >= 0")
    return value or None


def _display(value) -> str:
    if isinstance(value, Enum):
        return f"{list(type(value)).index(value)} ({value.value})"
    if value is None:
        return "0 (off)"
    return str(value)


def prompt_value(
    current: T,
    lines: list[str],
    parse: Callable[[str], T],
    read: Reader,
    echo: Echo,
) -> T:
    """Ask for one value, keeping current on empty input.

    Unparseable answers are reported and asked again.
    """
    for line in lines:
        echo(line)
    while True:
        raw = read(f"Leave empty for value: {_display(current)}\n").strip()
        if not raw:
            return current
        try:
            return parse(raw)
        except ValueError as e:
            echo(f"Could not parse input {raw!r}: {e}")


def _ask_fields(current: WalkExperimentParams, read: Reader, echo: Echo) -> dict:
    fields = {}
    fields["seed"] = prompt_value(current.seed, ["Seed:"], int, read, echo)
    fields["walk_type"] = prompt_value(
        current.walk_type, ["Walk type:", *enum_menu(WalkType)],
        enum_parser(WalkType), read, echo,
    )
    fields["grid_type"] = prompt_value(
        current.grid_type, ["Grid type:", *enum_menu(GridType)],
        enum_parser(GridType), read, echo,
    )
    fields["num_walks_coefficient"] = prompt_value(
        current.num_walks_coefficient,
        ["Number of walks coef (sqrt(walk_length) * coef = total_num_walks):"],
        float, read, echo,
    )
    fields["sequence_kind"] = prompt_value(
        current.sequence_kind, ["Sequence type:", *enum_menu(SequenceKind)],
        enum_parser(SequenceKind), read, echo,
    )
    fields["start_value"] = prompt_value(
        current.start_value, ["Initial step count:"], int, read, echo,
    )
    if fields["sequence_kind"] is SequenceKind.ARITHMETIC:
        fields["arithmetic_step"] = prompt_value(
            current.arithmetic_step, ["Step count increase:"], int, read, echo,
        )
    else:
        fields["geometric_ratio"] = prompt_value(
            current.geometric_ratio, ["Step count increase quotient:"],
            float, read, echo,
        )
    fields["step_count"] = prompt_value(
        current.step_count, ["Number of increase steps:"], int, read, echo,
    )
    fields["steps_per_sample"] = prompt_value(
        current.steps_per_sample,
        ["Steps per sample (0 simulates each bucket directly):"],
        optional_positive_int, read, echo,
    )
    fields["trace_name"] = prompt_value(
        current.trace_name, ["Trace name:"], str, read, echo,
    )
    return fields


def prompt_params(
    current: WalkExperimentParams, read: Reader, echo: Echo
) -> WalkExperimentParams:
    """Ask for every trace parameter, starting from current.

    If the answers fail validation the error is shown and the questions
    start over from current.
    """
    while True:
        fields = _ask_fields(current, read, echo)
        try:
            return replace(current, **fields)
        except ValueError as e:
            echo(f"Invalid parameters: {e}")


def prompt_yes_no(question: str, read: Reader, echo: Echo) -> bool:
    """True unless the answer is 'n' (case-insensitive)."""
    echo(question)
    return read("").strip().lower() != "n"


def prompt_output_name(read: Reader, echo: Echo) -> str:
    """Ask for a non-empty output name."""
    while True:
        echo("Name of the output file:")
        name = read("").strip()
        if name:
            return name
        echo("Output name must not be empty.")
