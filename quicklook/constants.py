"""Constants for float-to-byte quicklook conversion."""

import numpy as np

# Number of grey levels in the byte output
OUTPUT_LEVELS = 256

# Largest value a byte pixel may hold
BYTE_MAX = OUTPUT_LEVELS - 1

# Sample grids and transformed buffers are 32-bit floats
SAMPLE_DTYPE = np.float32
OUTPUT_DTYPE = np.uint8

# Reduction sentinels: any real observation replaces both
FLOAT32_MAX = float(np.finfo(np.float32).max)
FLOAT32_LOWEST = float(np.finfo(np.float32).min)

# Radiance values are clamped from below at this floor
RADIANCE_FLOOR = 1.0

# Default _FillValue of netCDF float variables (Sentinel-5P L2 products)
NETCDF_FLOAT_FILL = 9.969209968386869e36

# Bounds of a 32-bit signed integer cast
INT32_MAX = 2**31 - 1
INT32_MIN = -(2**31)
