"""Plot-series model handed to the plot sink.

A SeriesSet is an immutable accumulator: every add_* call returns a new set,
so the experiment runner threads it explicitly from trace to trace.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class LineSeries:
    """Named (x, y) series with optional symmetric error bars.

    group ties together the series that belong to one trace (data, band,
    fit) so they share a color. is_fit selects line rather than marker
    rendering.
    """

    name: str
    group: str
    x: tuple[float, ...]
    y: tuple[float, ...]
    error: tuple[float, ...] | None = None
    hover: tuple[str, ...] | None = None
    is_fit: bool = False

    def __post_init__(self) -> None:
        if len(self.x) != len(self.y):
            raise ValueError(
                f"Series '{self.name}': x ({len(self.x)}) and y ({len(self.y)}) "
                f"lengths differ"
            )
        if self.error is not None and len(self.error) != len(self.x):
            raise ValueError(
                f"Series '{self.name}': error length ({len(self.error)}) "
                f"!= x length ({len(self.x)})"
            )


@dataclass(frozen=True, slots=True)
class BandSeries:
    """Filled band between a lower and an upper envelope over x."""

    name: str
    group: str
    x: tuple[float, ...]
    lower: tuple[float, ...]
    upper: tuple[float, ...]

    def __post_init__(self) -> None:
        if not len(self.x) == len(self.lower) == len(self.upper):
            raise ValueError(f"Band '{self.name}': x/lower/upper lengths differ")


@dataclass(frozen=True, slots=True)
class FitAnnotation:
    """Per-trace fit summary (or failure note) shown next to the chart."""

    trace_name: str
    prefactor: float | None = None
    exponent: float | None = None
    sumsq: float | None = None
    exponent_interval: tuple[float, float] | None = None
    note: str = ""

    @property
    def has_fit(self) -> bool:
        return self.exponent is not None


@dataclass(frozen=True)
class SeriesSet:
    """Everything one output artifact displays, in insertion order."""

    lines: tuple[LineSeries, ...] = ()
    bands: tuple[BandSeries, ...] = ()
    annotations: tuple[FitAnnotation, ...] = ()

    def add_line(self, line: LineSeries) -> "SeriesSet":
        return replace(self, lines=self.lines + (line,))

    def add_band(self, band: BandSeries) -> "SeriesSet":
        return replace(self, bands=self.bands + (band,))

    def add_annotation(self, annotation: FitAnnotation) -> "SeriesSet":
        return replace(self, annotations=self.annotations + (annotation,))

    @property
    def groups(self) -> list[str]:
        """Trace groups in first-appearance order."""
        seen: dict[str, None] = {}
        for item in (*self.lines, *self.bands):
            seen.setdefault(item.group, None)
        for ann in self.annotations:
            seen.setdefault(ann.trace_name, None)
        return list(seen)

    def is_empty(self) -> bool:
        return not self.lines and not self.bands
