"""Quicklook - float instrument bands stretched to greyscale bytes.

Converts a 2-D grid of 32-bit radiometric samples into an 8-bit greyscale
grid suitable for preview imagery. Valid samples go through
``sample * scale + offset`` (clamped from below at 1.0) and are stretched
linearly between their min and max; no-data samples map to 0.

Example:
    >>> import numpy as np
    >>> from quicklook import scale_float_to_byte
    >>> band = np.array([[10, 20], [30, 40]], dtype=np.float32)
    >>> grid = scale_float_to_byte(band, nodata=-9999, scale=1.0, offset=0.0)
    >>> grid.width, grid.height
    (2, 2)
"""

from importlib.metadata import version

from quicklook.config import QuicklookConfig
from quicklook.models import ByteGrid, Extrema, ReducedBand, ScaleParameters
from quicklook.parallel import merge_extrema, partition_rows
from quicklook.scaling import (
    get_factor,
    quantize_band,
    reduce_band,
    scale_band,
    scale_float_to_byte,
)

__version__ = version("quicklook")

__all__ = [
    # Configuration
    "QuicklookConfig",
    # Models
    "ByteGrid",
    "Extrema",
    "ReducedBand",
    "ScaleParameters",
    # Functions
    "reduce_band",
    "get_factor",
    "quantize_band",
    "scale_band",
    "scale_float_to_byte",
    # Parallel helpers
    "merge_extrema",
    "partition_rows",
]
