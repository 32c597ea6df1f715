"""
Data types shared by the batch pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class ObjectDescriptor:
    """One entry of a bucket listing."""
    key: str
    size: int
    is_directory: bool = False


@dataclass(frozen=True)
class Page:
    """
    One listing response.

    A page without a ``next_token`` (None or empty) is the last page of the listing.
    """
    objects: Tuple[ObjectDescriptor, ...] = field(default_factory=tuple)
    next_token: Optional[str] = None

    @property
    def is_last(self) -> bool:
        return not self.next_token


class ResultStatus(Enum):
    """Per-item conversion outcome."""
    CONVERTED = "converted"
    FAILED = "failed"


@dataclass
class ConversionResult:
    """
    Outcome of converting a single object.

    Only the size of the encoded output is kept; the buffer itself is
    released once it has been written.
    """
    key: str
    status: ResultStatus
    output_name: Optional[str] = None
    size: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.CONVERTED

    @classmethod
    def converted(cls, key: str, output_name: str, size: int) -> "ConversionResult":
        return cls(key=key, status=ResultStatus.CONVERTED, output_name=output_name, size=size)

    @classmethod
    def failed(cls, key: str, error: str, output_name: Optional[str] = None) -> "ConversionResult":
        return cls(key=key, status=ResultStatus.FAILED, output_name=output_name, error=error)
