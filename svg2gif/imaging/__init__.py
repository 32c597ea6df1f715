"""Vector-to-raster conversion for svg2gif."""

from .raster import RasterConverter, fit_width, trim

__all__ = ["RasterConverter", "fit_width", "trim"]
