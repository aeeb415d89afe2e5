"""Float-to-byte stretching of radiometric bands for quicklook imagery.

The conversion runs in two passes over the band:

1. Reduction: every valid sample is mapped through ``sample*scale+offset``,
   clamped from below at 1.0, and the min/max of those values is tracked.
   No-data samples are stored as 0.0.
2. Quantization: the extrema give a linear factor ``256 / (max - min)`` and
   every stored value that is nonzero after truncation becomes
   ``int((value - min) * factor)``.

Both truncations go toward zero, and the no-data comparison is exact.
"""

import logging

import numpy as np

from quicklook.constants import (
    BYTE_MAX,
    INT32_MAX,
    INT32_MIN,
    OUTPUT_DTYPE,
    OUTPUT_LEVELS,
    RADIANCE_FLOOR,
    SAMPLE_DTYPE,
)
from quicklook.models import ByteGrid, Extrema, ReducedBand, ScaleParameters

logger = logging.getLogger(__name__)


def as_sample_grid(samples) -> np.ndarray:
    """Return ``samples`` as a 2-D float32 array.

    Raises:
        ValueError: If the input is not a non-empty 2-D grid.
    """
    grid = np.asarray(samples, dtype=SAMPLE_DTYPE)
    if grid.ndim != 2:
        raise ValueError(f"Sample grid must be 2-D, got shape {grid.shape}")
    if grid.size == 0:
        raise ValueError(f"Sample grid is empty, got shape {grid.shape}")
    return grid


def reduce_grid(grid: np.ndarray, params: ScaleParameters) -> ReducedBand:
    """Run the reduction pass over an already validated float32 grid."""
    # Samples are widened so the fill value comparison happens in double.
    # The widened copy is the only float64 scratch buffer of the pass.
    radiance = grid.astype(np.float64)
    nodata_mask = radiance == params.nodata

    with np.errstate(over="ignore", invalid="ignore"):
        np.multiply(radiance, params.scale, out=radiance)
        np.add(radiance, params.offset, out=radiance)
        np.maximum(radiance, RADIANCE_FLOOR, out=radiance)
        transformed = radiance.astype(SAMPLE_DTYPE)
    del radiance
    transformed[nodata_mask] = 0.0

    extrema = Extrema.from_values(transformed[~nodata_mask])
    return ReducedBand(transformed=transformed, extrema=extrema)


def reduce_band(samples, nodata: float, scale: float = 1.0, offset: float = 0.0) -> ReducedBand:
    """Compute the transformed buffer and the extrema of a band.

    Args:
        samples: 2-D array-like of raw samples, read as float32.
        nodata: Fill value. Matching samples are stored as 0.0 and do not
            contribute to the extrema.
        scale: Gain applied to valid samples. 0 is treated as 1.0.
        offset: Bias added after the gain.

    Returns:
        ReducedBand with the float32 buffer and its extrema. When every
        sample is no-data the extrema are empty (``min > max``).
    """
    params = ScaleParameters(nodata=nodata, scale=scale, offset=offset)
    return reduce_grid(as_sample_grid(samples), params)


def get_factor(value_range: float, expected_range: int = OUTPUT_LEVELS) -> np.float32:
    """Linear factor mapping ``value_range`` onto ``expected_range`` levels.

    A range of zero (a single distinct value) or below zero (no valid
    pixel) yields 1.0.
    """
    if value_range <= 0:
        return np.float32(1.0)
    return np.float32(expected_range) / np.float32(value_range)


def _truncate(values: np.ndarray) -> np.ndarray:
    """Truncate toward zero into int32 range. NaN becomes 0, infinities saturate."""
    truncated = np.array(values, dtype=np.float64)
    np.trunc(truncated, out=truncated)
    np.nan_to_num(truncated, copy=False, nan=0.0, posinf=INT32_MAX, neginf=INT32_MIN)
    np.clip(truncated, INT32_MIN, INT32_MAX, out=truncated)
    return truncated.astype(np.int32)


def quantize_band(
    transformed: np.ndarray,
    extrema: Extrema,
    width: int | None = None,
    height: int | None = None,
) -> ByteGrid:
    """Map a transformed buffer onto the 0-255 byte range.

    Values that truncate to 0 (the no-data entries) are emitted as 0 without
    rescaling. The rescaled integer is clamped into [0, 255].

    Args:
        transformed: Buffer produced by the reduction pass. May be flat when
            ``width`` and ``height`` are given.
        extrema: Global min/max of the valid transformed values.
        width: Expected number of columns.
        height: Expected number of rows.

    Returns:
        ByteGrid with the same dimensions as the buffer.

    Raises:
        ValueError: If the buffer does not match the given dimensions.
    """
    buffer = np.asarray(transformed, dtype=SAMPLE_DTYPE)

    if width is not None or height is not None:
        if width is None or height is None:
            raise ValueError("width and height must be given together")
        if buffer.ndim not in (1, 2):
            raise ValueError(f"Transformed buffer must be flat or 2-D, got shape {buffer.shape}")
        if buffer.size != width * height or (buffer.ndim == 2 and buffer.shape != (height, width)):
            raise ValueError(
                f"Transformed buffer of shape {buffer.shape} does not match w={width}, h={height}"
            )
        buffer = buffer.reshape(height, width)
    elif buffer.ndim != 2:
        raise ValueError(f"Transformed buffer must be 2-D, got shape {buffer.shape}")

    factor = get_factor(extrema.range)
    low = np.float32(extrema.min)

    # Same as truncating to a nonzero integer; NaN compares false
    keep = np.abs(buffer) >= 1.0
    with np.errstate(over="ignore", invalid="ignore"):
        scaled = (buffer[keep] - low) * factor

    data = np.zeros(buffer.shape, dtype=OUTPUT_DTYPE)
    data[keep] = np.clip(_truncate(scaled), 0, BYTE_MAX)
    return ByteGrid(data=data)


def scale_band(samples, params: ScaleParameters, workers: int = 1) -> ByteGrid:
    """Convert a float band to a greyscale byte grid.

    Args:
        samples: 2-D array-like of raw samples.
        params: No-data value, scale and offset.
        workers: Number of threads. Rows are partitioned across threads when
            greater than 1; the result is identical to the serial path.

    Returns:
        ByteGrid with the dimensions of ``samples``.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    grid = as_sample_grid(samples)
    height, width = grid.shape
    logger.debug(
        f"Converting to byte image w={width}, h={height}, nodata={params.nodata}, "
        f"scale={params.scale}, offset={params.offset}"
    )

    if workers > 1:
        from quicklook.parallel import scale_band_parallel

        return scale_band_parallel(grid, params, workers)

    band = reduce_grid(grid, params)
    logger.debug(
        f"Extrema min={band.extrema.min}, max={band.extrema.max}, "
        f"factor={get_factor(band.extrema.range)}"
    )
    return quantize_band(band.transformed, band.extrema)


def scale_float_to_byte(
    samples,
    nodata: float,
    scale: float = 1.0,
    offset: float = 0.0,
    workers: int = 1,
) -> ByteGrid:
    """Stretch a float band to bytes for greyscale quicklook imagery.

    Args:
        samples: 2-D array-like of raw samples (e.g. one instrument band).
        nodata: Fill value. Matching samples always map to 0.
        scale: Gain applied to each sample. A scale of 0 is treated as 1.0.
        offset: Bias applied to each sample.
        workers: Number of threads used for both passes.

    Returns:
        ByteGrid with the dimensions of ``samples``.

    Example:
        >>> grid = scale_float_to_byte([[10, 20], [30, 40]], nodata=-9999)
        >>> grid.data.tolist()
        [[0, 85], [170, 255]]
    """
    if scale == 0:
        scale = 1.0
    params = ScaleParameters(nodata=nodata, scale=scale, offset=offset)
    return scale_band(samples, params, workers=workers)
