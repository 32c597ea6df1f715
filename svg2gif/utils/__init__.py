"""Utility helpers for svg2gif."""

from .logger import setup_logger

__all__ = ["setup_logger"]
