"""FITS band loading and PNG output for the command line."""

import logging
from pathlib import Path

import numpy as np
from astropy.io import fits
from PIL import Image

from quicklook.constants import OUTPUT_DTYPE, SAMPLE_DTYPE
from quicklook.models import ByteGrid

logger = logging.getLogger(__name__)


def load_band(image_path: str | Path, hdu: int | None = None) -> np.ndarray:
    """Load a 2-D band from a FITS file as float32.

    Args:
        image_path: Path to the FITS file.
        hdu: Index of the HDU to read. None = first HDU with 2-D data.

    Returns:
        Float32 array of shape (height, width).

    Raises:
        ValueError: If the selected HDU (or every HDU) lacks 2-D data.
    """
    image_path = Path(image_path)

    with fits.open(image_path) as hdul:
        if hdu is not None:
            if hdu >= len(hdul):
                raise ValueError(f"HDU {hdu} not found in {image_path} ({len(hdul)} HDUs)")
            data = hdul[hdu].data
            if data is None or data.ndim != 2:
                raise ValueError(f"HDU {hdu} of {image_path} does not hold 2-D image data")
            band = data.astype(SAMPLE_DTYPE)
        else:
            for candidate in hdul:
                if candidate.data is not None and candidate.data.ndim == 2:
                    band = candidate.data.astype(SAMPLE_DTYPE)
                    break
            else:
                raise ValueError("No 2D image data found in FITS file")

    logger.debug(f"Loaded band {band.shape[1]}x{band.shape[0]} from {image_path}")
    return band


def save_quicklook(grid: ByteGrid, output_path: str | Path) -> None:
    """Write a byte grid as an 8-bit greyscale PNG, bytes unchanged.

    The first row of the grid is the bottom row of the image, as in FITS.
    """
    output_path = Path(output_path)
    img8 = np.ascontiguousarray(np.flipud(grid.data), dtype=OUTPUT_DTYPE)
    # A 2-D uint8 array maps to Pillow mode "L"
    Image.fromarray(img8).save(output_path, format="PNG")

    size_kb = output_path.stat().st_size / 1024
    logger.info(f"Saved quicklook to {output_path} ({size_kb:.1f} KB)")
