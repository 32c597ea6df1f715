"""
SVG to raster conversion.

cairosvg rasterizes the vector document, Pillow does the geometry
(trim, resize) and the final encode.
"""

import io
import logging
from typing import Optional, Tuple

from PIL import Image, ImageChops

# cairosvg treats one CSS pixel as 1/96 inch
CSS_DPI = 96.0


def _union(boxes) -> Optional[Tuple[int, int, int, int]]:
    boxes = [b for b in boxes if b]
    if not boxes:
        return None
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def trim(image: Image.Image) -> Image.Image:
    """
    Remove the border whose colour matches the top-left pixel.

    Transparent margins are the common case for SVG output, but an opaque
    uniform background is trimmed the same way. The cropped image is a new
    canvas with its origin at (0, 0), so no separate re-page step is needed.
    An image made entirely of the border colour is returned unchanged.
    """
    background = Image.new(image.mode, image.size, image.getpixel((0, 0)))
    diff = ImageChops.difference(image, background)
    # Per band so that alpha-only and colour-only differences both count
    bbox = _union(band.getbbox() for band in diff.split())
    if bbox is None or bbox == (0, 0) + image.size:
        return image
    return image.crop(bbox)


def fit_width(image: Image.Image, max_width: int) -> Image.Image:
    """Downscale uniformly so the width is at most ``max_width``."""
    width, height = image.size
    if width <= max_width:
        return image
    ratio = max_width / width
    new_height = max(1, round(height * ratio))
    return image.resize((max_width, new_height), Image.Resampling.LANCZOS)


class RasterConverter:
    """
    Converts SVG documents to a raster format.

    Args:
        density: Rasterization density in DPI; 96 renders at the document's own pixel size
        max_width: Widest output allowed before downscaling
        target_format: Pillow format name for the encoded output
    """

    def __init__(self, density: float = 1000, max_width: int = 1600, target_format: str = "GIF"):
        self.density = density
        self.max_width = max_width
        self.target_format = target_format
        self.logger = logging.getLogger(__name__)

    def decode(self, svg_data: bytes) -> Image.Image:
        """Rasterize SVG bytes at the configured density into an RGBA image."""
        # cairosvg loads libcairo on import; only pay for it when decoding
        import cairosvg

        png_data = cairosvg.svg2png(bytestring=svg_data, scale=self.density / CSS_DPI)
        with Image.open(io.BytesIO(png_data)) as img:
            return img.convert("RGBA")

    def transform(self, image: Image.Image) -> Image.Image:
        trimmed = trim(image)
        resized = fit_width(trimmed, self.max_width)
        if resized is not trimmed:
            self.logger.debug(f"Resized {trimmed.size} -> {resized.size}")
        return resized

    def encode(self, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format=self.target_format)
        return buffer.getvalue()

    def convert(self, svg_data: bytes) -> bytes:
        """
        Run the full decode, trim, resize and encode sequence.

        Args:
            svg_data: Raw SVG document

        Returns:
            Encoded raster bytes in ``target_format``
        """
        image = self.decode(svg_data)
        try:
            return self.encode(self.transform(image))
        finally:
            image.close()
