"""Tests for quicklook data models."""

import numpy as np
import pytest

from quicklook import ByteGrid, Extrema, ReducedBand, ScaleParameters
from quicklook.constants import FLOAT32_LOWEST, FLOAT32_MAX


class TestScaleParameters:
    """Tests for the ScaleParameters dataclass."""

    def test_defaults(self):
        """Test default scale and offset."""
        params = ScaleParameters(nodata=-1.0)
        assert params.scale == 1.0
        assert params.offset == 0.0

    def test_zero_scale_becomes_one(self):
        """Test that a zero scale is normalized to 1.0."""
        params = ScaleParameters(nodata=-1.0, scale=0.0)
        assert params.scale == 1.0

    def test_negative_scale_kept(self):
        """Test that only an exact zero is normalized."""
        params = ScaleParameters(nodata=-1.0, scale=-0.5)
        assert params.scale == -0.5

    def test_coerces_strings(self):
        """Test that numeric strings are converted to floats."""
        params = ScaleParameters(nodata="-9999", scale="0.5", offset="2")
        assert params.nodata == -9999.0
        assert params.scale == 0.5
        assert params.offset == 2.0

    @pytest.mark.parametrize("field", ["nodata", "scale", "offset"])
    def test_rejects_non_finite(self, field):
        """Test that NaN and infinities are rejected."""
        values = {"nodata": -1.0, "scale": 1.0, "offset": 0.0}
        values[field] = float("nan")
        with pytest.raises(ValueError, match=field):
            ScaleParameters(**values)

    def test_from_dict(self):
        """Test creating parameters from a dictionary."""
        params = ScaleParameters.from_dict({"nodata": 0.0, "offset": 3.0})
        assert params.nodata == 0.0
        assert params.scale == 1.0
        assert params.offset == 3.0

    def test_from_dict_requires_nodata(self):
        """Test that nodata is required."""
        with pytest.raises(ValueError, match="nodata"):
            ScaleParameters.from_dict({"scale": 2.0})


class TestExtrema:
    """Tests for the Extrema dataclass."""

    def test_empty(self):
        """Test the sentinel values of an empty pair."""
        extrema = Extrema.empty()
        assert extrema.min == FLOAT32_MAX
        assert extrema.max == FLOAT32_LOWEST
        assert extrema.is_empty
        assert extrema.range < 0

    def test_single_value(self):
        """Test that a single observation gives a zero range."""
        extrema = Extrema.from_values(np.array([7.5], dtype=np.float32))
        assert not extrema.is_empty
        assert extrema.range == 0.0

    def test_from_values_ignores_nan(self):
        """Test that NaN entries are skipped."""
        values = np.array([np.nan, 3.0, 9.0, np.nan], dtype=np.float32)
        extrema = Extrema.from_values(values)
        assert (extrema.min, extrema.max) == (3.0, 9.0)

    def test_from_values_empty(self):
        """Test that no values give the empty pair."""
        assert Extrema.from_values(np.array([], dtype=np.float32)).is_empty

    def test_merge(self):
        """Test merging two pairs."""
        merged = Extrema(2.0, 5.0).merge(Extrema(1.0, 3.0))
        assert (merged.min, merged.max) == (1.0, 5.0)

    def test_merge_with_empty(self):
        """Test that the empty pair is the identity of merge."""
        extrema = Extrema(2.0, 5.0)
        assert extrema.merge(Extrema.empty()) == extrema
        assert Extrema.empty().merge(extrema) == extrema

    def test_range_is_float32(self):
        """Test that the range is rounded to 32-bit float."""
        extrema = Extrema(1.0, 1.1)
        assert extrema.range == float(np.float32(1.1 - 1.0))


class TestReducedBand:
    """Tests for the ReducedBand dataclass."""

    def test_dimensions(self):
        """Test width and height of the transformed buffer."""
        band = ReducedBand(transformed=np.zeros((3, 8), dtype=np.float32), extrema=Extrema())
        assert band.width == 8
        assert band.height == 3


class TestByteGrid:
    """Tests for the ByteGrid dataclass."""

    def test_dimensions(self):
        """Test width, height and shape."""
        grid = ByteGrid(data=np.zeros((4, 6), dtype=np.uint8))
        assert grid.width == 6
        assert grid.height == 4
        assert grid.shape == (4, 6)

    def test_rejects_non_2d(self):
        """Test that a flat array is rejected."""
        with pytest.raises(ValueError, match="2-D"):
            ByteGrid(data=np.zeros(4, dtype=np.uint8))
