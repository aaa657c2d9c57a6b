"""Color policy for Julia set rasters."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .escape import IN_SET

Color = tuple[int, int, int, int]

CHANNEL_MIN = 0
CHANNEL_MAX = 255

IN_SET_COLOR: Color = (0, 0, 0, 255)
OUT_OF_SET_COLOR: Color = (10, 10, 30, 255)
# Added to each RGBA channel per iteration survived before escaping.
ESCAPE_DELTA: tuple[float, float, float, float] = (1.6, 0.8, 1.4, 0.0)


def _clamp_channel(value: float) -> int:
    return max(CHANNEL_MIN, min(CHANNEL_MAX, math.trunc(value)))


@dataclass(frozen=True)
class ColorPolicy:
    """Map membership results to RGBA colors.

    Points in the set get the constant ``in_set`` color. A point that escaped
    at stage ``k`` gets ``out_of_set + delta * k`` per channel, truncated to
    an integer and clamped to the 0-255 range.
    """

    in_set: Color = IN_SET_COLOR
    out_of_set: Color = OUT_OF_SET_COLOR
    delta: tuple[float, float, float, float] = ESCAPE_DELTA

    def color_for_in_set(self) -> Color:
        return tuple(self.in_set)

    def escape_channels(self, escape_stage: int) -> tuple[float, float, float, float]:
        """Unquantised channel values for ``escape_stage``, clamped to range."""

        return tuple(
            max(float(CHANNEL_MIN), min(float(CHANNEL_MAX), float(base) + step * escape_stage))
            for base, step in zip(self.out_of_set, self.delta)
        )

    def color_for_escape(self, escape_stage: int) -> Color:
        return tuple(
            _clamp_channel(float(base) + step * escape_stage)
            for base, step in zip(self.out_of_set, self.delta)
        )

    def colorize(self, stages: np.ndarray) -> np.ndarray:
        """Color a whole array of stages, ``IN_SET`` marking members.

        Returns a ``uint8`` array with a trailing RGBA axis. Each element
        matches :meth:`color_for_in_set` or :meth:`color_for_escape`.
        """

        stages = np.asarray(stages)
        base = np.asarray(self.out_of_set, dtype=np.float64)
        delta = np.asarray(self.delta, dtype=np.float64)

        channels = base + delta * stages[..., np.newaxis].astype(np.float64)
        rgba = np.clip(np.trunc(channels), CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)
        rgba[stages == IN_SET] = np.asarray(self.in_set, dtype=np.uint8)
        return rgba


DEFAULT_POLICY = ColorPolicy()


def color_for_in_set() -> Color:
    return DEFAULT_POLICY.color_for_in_set()


def color_for_escape(escape_stage: int) -> Color:
    return DEFAULT_POLICY.color_for_escape(escape_stage)
