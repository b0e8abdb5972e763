"""Display colors for coverage values and coverage changes."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from coveragegate.model import Baseline, Coverage, Metric, Value


class ColorId(Enum):
    """Logical colors used to render coverage values."""

    INSUFFICIENT = "insufficient"
    VERY_BAD = "very-bad"
    BAD = "bad"
    INADEQUATE = "inadequate"
    AVERAGE = "average"
    GOOD = "good"
    VERY_GOOD = "very-good"
    EXCELLENT = "excellent"
    BLACK = "black"
    WHITE = "white"


@dataclass(frozen=True)
class DisplayColors:
    """Line (text) and fill (background) color as ``#rrggbb`` strings."""

    line_color: str
    fill_color: str

    def to_dict(self) -> dict:
        return {"lineColor": self.line_color, "fillColor": self.fill_color}


DEFAULT_PALETTE: dict[ColorId, str] = {
    ColorId.INSUFFICIENT: "#ef9a9a",
    ColorId.VERY_BAD: "#f6bca0",
    ColorId.BAD: "#fbdea6",
    ColorId.INADEQUATE: "#fff4a8",
    ColorId.AVERAGE: "#e2f1aa",
    ColorId.GOOD: "#c5e5a6",
    ColorId.VERY_GOOD: "#a3d0a5",
    ColorId.EXCELLENT: "#7fbd81",
    ColorId.BLACK: "#000000",
    ColorId.WHITE: "#ffffff",
}

DEFAULT_COLOR = DisplayColors(DEFAULT_PALETTE[ColorId.BLACK], DEFAULT_PALETTE[ColorId.WHITE])


class ColorProvider:
    """Maps color ids to display colors of a palette."""

    def __init__(self, palette: Optional[dict[ColorId, str]] = None):
        self.palette = dict(DEFAULT_PALETTE)
        if palette:
            self.palette.update(palette)

    def display_colors_of(self, color_id: ColorId) -> DisplayColors:
        fill = self.palette[color_id]
        return DisplayColors(self._line_color_for(fill), fill)

    def blended_display_colors(
        self, weight_first: float, weight_second: float, first: ColorId, second: ColorId
    ) -> DisplayColors:
        """Blend the fill colors of two ids, weighted by the given factors."""
        fill = blend_colors(self.palette[first], self.palette[second], weight_first, weight_second)
        return DisplayColors(self._line_color_for(fill), fill)

    def _line_color_for(self, fill: str) -> str:
        red, green, blue = _to_rgb(fill)
        luminance = (0.299 * red + 0.587 * green + 0.114 * blue) / 255
        if luminance > 0.5:
            return self.palette[ColorId.BLACK]
        return self.palette[ColorId.WHITE]


def blend_colors(first: str, second: str, weight_first: float = 1.0, weight_second: float = 1.0) -> str:
    """Return the weighted average of two ``#rrggbb`` colors.

    Raises:
        ValueError: If a weight is negative
    """
    if weight_first < 0 or weight_second < 0:
        raise ValueError(f"Color weights must not be negative: {weight_first}, {weight_second}")
    total = weight_first + weight_second
    if total == 0:
        weight_first = weight_second = 1.0
        total = 2.0
    mixed = [
        round((a * weight_first + b * weight_second) / total)
        for a, b in zip(_to_rgb(first), _to_rgb(second))
    ]
    return "#{:02x}{:02x}{:02x}".format(*mixed)


def _to_rgb(color: str) -> tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


class CoverageLevel(Enum):
    """Color bands for absolute coverage percentages (descending)."""

    LVL_95 = (95.0, ColorId.EXCELLENT)
    LVL_90 = (90.0, ColorId.VERY_GOOD)
    LVL_85 = (85.0, ColorId.GOOD)
    LVL_80 = (80.0, ColorId.AVERAGE)
    LVL_75 = (75.0, ColorId.INADEQUATE)
    LVL_50 = (50.0, ColorId.BAD)
    LVL_25 = (25.0, ColorId.VERY_BAD)
    LVL_0 = (0.0, ColorId.INSUFFICIENT)
    NA = (-1.0, ColorId.WHITE)

    @property
    def level(self) -> float:
        return self.value[0]

    @property
    def color_id(self) -> ColorId:
        return self.value[1]

    @classmethod
    def display_colors_of(cls, coverage: float, provider: ColorProvider) -> DisplayColors:
        return _blended_colors(coverage, list(cls), provider)


class CoverageChangeLevel(Enum):
    """Color bands for coverage changes in percentage points (descending)."""

    INCREASE_5 = (5.0, ColorId.EXCELLENT)
    INCREASE_2 = (2.0, ColorId.VERY_GOOD)
    EQUALS = (0.0, ColorId.AVERAGE)
    DECREASE_2 = (-2.0, ColorId.INADEQUATE)
    DECREASE_5 = (-5.0, ColorId.BAD)
    DECREASE_10 = (-10.0, ColorId.VERY_BAD)
    DECREASE_20 = (-20.0, ColorId.INSUFFICIENT)
    NA = (-100.0, ColorId.WHITE)

    @property
    def change(self) -> float:
        return self.value[0]

    @property
    def color_id(self) -> ColorId:
        return self.value[1]

    @classmethod
    def display_colors_of(cls, change: float, provider: ColorProvider) -> DisplayColors:
        return _blended_colors(change, list(cls), provider)


class CoverageChangeTendency(Enum):
    """Direction of a change, independent of its size."""

    INCREASED = ColorId.EXCELLENT
    EQUALS = ColorId.AVERAGE
    DECREASED = ColorId.INSUFFICIENT

    @property
    def color_id(self) -> ColorId:
        return self.value

    @classmethod
    def of(cls, change: float) -> "CoverageChangeTendency":
        if change > 0:
            return cls.INCREASED
        if change < 0:
            return cls.DECREASED
        return cls.EQUALS

    @classmethod
    def display_colors_of(cls, change: float, provider: ColorProvider) -> DisplayColors:
        return provider.display_colors_of(cls.of(change).color_id)


def _blended_colors(value: float, levels: list, provider: ColorProvider) -> DisplayColors:
    """Blend between the two levels enclosing ``value``.

    ``levels`` is ordered descending and its last entry is the "not
    available" level, used for values below all other levels.
    """
    for index, level in enumerate(levels[:-1]):
        threshold = level.value[0]
        if value >= threshold:
            distance_level = value - threshold
            if index == 0 or distance_level == 0:
                return provider.display_colors_of(level.color_id)
            upper = levels[index - 1]
            distance_upper = upper.value[0] - value
            return provider.blended_display_colors(
                distance_level, distance_upper, upper.color_id, level.color_id
            )
    return provider.display_colors_of(levels[-1].color_id)


def display_colors_for(
    baseline: Baseline, metric: Metric, value: Optional[Value], provider: Optional[ColorProvider] = None
) -> DisplayColors:
    """Return the colors to render a value of a baseline.

    Absolute baselines color coverage percentages by level; deltas are
    colored by their tendency, inverted for metrics where larger is worse.
    """
    provider = provider or ColorProvider()
    if value is None:
        return DEFAULT_COLOR

    if baseline.is_delta:
        change = value.numeric if metric.larger_is_better else -value.numeric
        return CoverageChangeTendency.display_colors_of(change, provider)

    if isinstance(value, Coverage):
        return CoverageLevel.display_colors_of(value.percentage, provider)
    return DEFAULT_COLOR
