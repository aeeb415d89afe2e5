"""Pytest configuration and fixtures for quicklook tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from astropy.io import fits

from quicklook import ScaleParameters

NODATA = -9999.0


@pytest.fixture
def nodata() -> float:
    """Return the fill value used by the sample bands."""
    return NODATA


@pytest.fixture
def small_band() -> np.ndarray:
    """Return the 2x2 band [[10, 20], [30, 40]]."""
    return np.array([[10, 20], [30, 40]], dtype=np.float32)


@pytest.fixture
def random_band() -> np.ndarray:
    """Return a 37x53 band with a sprinkling of no-data pixels."""
    rng = np.random.default_rng(42)
    band = rng.uniform(-50.0, 5000.0, size=(37, 53)).astype(np.float32)
    band[rng.random(band.shape) < 0.1] = NODATA
    # A whole row of fill values ends up alone in some partitions
    band[5, :] = NODATA
    return band


@pytest.fixture
def default_params() -> ScaleParameters:
    """Return parameters with unit scale and zero offset."""
    return ScaleParameters(nodata=NODATA, scale=1.0, offset=0.0)


@pytest.fixture
def fits_band(tmp_path: Path) -> Path:
    """Write a FITS file with an empty primary HDU and a 2-D image extension."""
    data = np.arange(24, dtype=np.float32).reshape(4, 6) * 10.0
    data[0, 0] = NODATA
    path = tmp_path / "band.fits"
    fits.HDUList([fits.PrimaryHDU(), fits.ImageHDU(data)]).writeto(path)
    return path
