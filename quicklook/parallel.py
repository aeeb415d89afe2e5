"""Row-partitioned execution of the reduction and quantization passes."""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from quicklook.constants import OUTPUT_DTYPE, SAMPLE_DTYPE
from quicklook.models import ByteGrid, Extrema, ReducedBand, ScaleParameters
from quicklook.scaling import get_factor, quantize_band, reduce_grid

logger = logging.getLogger(__name__)


def partition_rows(height: int, partitions: int) -> list[slice]:
    """Split ``height`` rows into at most ``partitions`` contiguous slices."""
    count = max(1, min(partitions, height))
    edges = np.linspace(0, height, count + 1).astype(int)
    return [slice(start, stop) for start, stop in zip(edges[:-1], edges[1:]) if stop > start]


def merge_extrema(partials: list[Extrema]) -> Extrema:
    """Merge partial extrema pairwise, level by level."""
    level = list(partials)
    if not level:
        return Extrema.empty()

    while len(level) > 1:
        merged = []
        for i in range(0, len(level), 2):
            if i + 1 < len(level):
                merged.append(level[i].merge(level[i + 1]))
            else:
                merged.append(level[i])
        level = merged

    return level[0]


def reduce_band_parallel(grid: np.ndarray, params: ScaleParameters, workers: int) -> ReducedBand:
    """Reduction pass with one task per row partition.

    Each task writes its own rows of the transformed buffer and returns its
    partial extrema; the partials are merged after all tasks complete.
    """
    rows = partition_rows(grid.shape[0], workers)
    transformed = np.empty(grid.shape, dtype=SAMPLE_DTYPE)

    def reduce_partition(part: slice) -> Extrema:
        band = reduce_grid(grid[part], params)
        transformed[part] = band.transformed
        return band.extrema

    logger.debug(f"Reducing {grid.shape[0]} rows in {len(rows)} partitions")
    with ThreadPoolExecutor(max_workers=workers) as executor:
        partials = list(executor.map(reduce_partition, rows))

    return ReducedBand(transformed=transformed, extrema=merge_extrema(partials))


def quantize_band_parallel(band: ReducedBand, workers: int) -> ByteGrid:
    """Quantization pass with one task per row partition, using global extrema."""
    rows = partition_rows(band.height, workers)
    data = np.empty(band.transformed.shape, dtype=OUTPUT_DTYPE)

    def quantize_partition(part: slice) -> None:
        data[part] = quantize_band(band.transformed[part], band.extrema).data

    with ThreadPoolExecutor(max_workers=workers) as executor:
        list(executor.map(quantize_partition, rows))

    return ByteGrid(data=data)


def scale_band_parallel(grid: np.ndarray, params: ScaleParameters, workers: int) -> ByteGrid:
    """Run both passes across ``workers`` threads.

    Quantization starts only once the reduction of every partition is merged.
    """
    band = reduce_band_parallel(grid, params, workers)
    logger.debug(
        f"Extrema min={band.extrema.min}, max={band.extrema.max}, "
        f"factor={get_factor(band.extrema.range)}"
    )
    return quantize_band_parallel(band, workers)
