"""
svg2gif - batch converter for SVG documents stored in S3.

Walks a paginated bucket listing, converts every eligible SVG to an
animated-capable GIF and writes the results to local disk.
"""

__version__ = "0.1.0"
