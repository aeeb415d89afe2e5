"""Data models for float-to-byte quicklook conversion."""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from quicklook.constants import FLOAT32_LOWEST, FLOAT32_MAX


@dataclass
class ScaleParameters:
    """Affine parameters applied to every valid sample.

    Attributes:
        nodata: Fill value marking pixels without a measurement. Compared
            by exact equality.
        scale: Multiplicative gain. A scale of exactly 0 is treated as 1.0.
        offset: Additive bias.
    """

    nodata: float
    scale: float = 1.0
    offset: float = 0.0

    def __post_init__(self):
        """Coerce to floats, reject non-finite values and normalize zero scale."""
        for name in ("nodata", "scale", "offset"):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
            setattr(self, name, value)

        if self.scale == 0:
            self.scale = 1.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScaleParameters":
        """Create parameters from a dictionary.

        Args:
            data: Dictionary with at least a ``nodata`` key.

        Returns:
            ScaleParameters instance.
        """
        if "nodata" not in data:
            raise ValueError("nodata is required")

        return cls(
            nodata=data["nodata"],
            scale=data.get("scale", 1.0),
            offset=data.get("offset", 0.0),
        )


@dataclass
class Extrema:
    """Minimum and maximum of the transformed values of valid pixels.

    An empty pair (no valid pixel seen) keeps the reduction sentinels, so
    that ``min > max`` and the range is negative.
    """

    min: float = FLOAT32_MAX
    max: float = FLOAT32_LOWEST

    @classmethod
    def empty(cls) -> "Extrema":
        """Return the identity element of the min/max reduction."""
        return cls()

    @classmethod
    def from_values(cls, values: np.ndarray) -> "Extrema":
        """Reduce an array of transformed values, ignoring NaN entries."""
        values = values[~np.isnan(values)]
        if values.size == 0:
            return cls.empty()
        return cls(min=float(values.min()), max=float(values.max()))

    def merge(self, other: "Extrema") -> "Extrema":
        """Combine two partial reductions. Associative and commutative."""
        return Extrema(min=min(self.min, other.min), max=max(self.max, other.max))

    @property
    def is_empty(self) -> bool:
        """True when no valid pixel contributed to this pair."""
        return self.min > self.max

    @property
    def range(self) -> float:
        """Spread of the transformed values, rounded to 32-bit float."""
        if self.is_empty:
            return self.max - self.min
        return float(np.float32(self.max - self.min))


@dataclass
class ReducedBand:
    """Output of the reduction pass.

    Attributes:
        transformed: Float32 buffer holding ``max(1.0, sample*scale+offset)``
            for valid pixels and 0.0 for no-data pixels.
        extrema: Min/max over the valid transformed values.
    """

    transformed: np.ndarray
    extrema: Extrema

    @property
    def width(self) -> int:
        return self.transformed.shape[1]

    @property
    def height(self) -> int:
        return self.transformed.shape[0]


@dataclass
class ByteGrid:
    """Greyscale byte image with the dimensions of the source band.

    Attributes:
        data: Row-major uint8 array of shape (height, width).
    """

    data: np.ndarray

    def __post_init__(self):
        if self.data.ndim != 2:
            raise ValueError(f"ByteGrid data must be 2-D, got shape {self.data.shape}")

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.data.shape[1]

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.data.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)
