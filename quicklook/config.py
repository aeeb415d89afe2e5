"""Configuration for quicklook conversion."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from quicklook.constants import NETCDF_FLOAT_FILL
from quicklook.models import ScaleParameters


@dataclass
class QuicklookConfig:
    """Configuration for float-to-byte quicklook conversion.

    Attributes:
        nodata: Fill value of the band. Defaults to the netCDF float fill value.
        scale: Gain applied to each sample. Defaults to 1.0.
        offset: Bias applied to each sample. Defaults to 0.0.
        workers: Number of threads for the conversion passes. Defaults to 1.
        hdu: FITS HDU holding the band. None = first 2-D image HDU.
    """

    nodata: float = NETCDF_FLOAT_FILL
    scale: float = 1.0
    offset: float = 0.0
    workers: int = 1
    hdu: int | None = None

    def __post_init__(self):
        """Convert numeric strings and check the worker count."""
        self.nodata = float(self.nodata)
        self.scale = float(self.scale)
        self.offset = float(self.offset)
        self.workers = int(self.workers)
        if self.hdu is not None:
            self.hdu = int(self.hdu)
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    def parameters(self) -> ScaleParameters:
        """Return the scalar conversion parameters."""
        return ScaleParameters(nodata=self.nodata, scale=self.scale, offset=self.offset)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "QuicklookConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            QuicklookConfig instance.

        Example YAML format:
            nodata: -9999.0
            scale: 0.001
            offset: 0.0
            workers: 4
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuicklookConfig":
        """Create configuration from a dictionary.

        Args:
            data: Dictionary with configuration values. Missing keys take
                their defaults.

        Returns:
            QuicklookConfig instance.
        """
        unknown = set(data) - {"nodata", "scale", "offset", "workers", "hdu"}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        return cls(
            nodata=data.get("nodata", NETCDF_FLOAT_FILL),
            scale=data.get("scale", 1.0),
            offset=data.get("offset", 0.0),
            workers=data.get("workers", 1),
            hdu=data.get("hdu"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Returns:
            Dictionary representation of the configuration.
        """
        return {
            "nodata": self.nodata,
            "scale": self.scale,
            "offset": self.offset,
            "workers": self.workers,
            "hdu": self.hdu,
        }

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file.

        Args:
            path: Path to write the YAML configuration file.
        """
        path = Path(path)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)
