"""
Candidate selection for a listing page.
"""

from typing import Iterable, List

from .models import ObjectDescriptor


class CandidateFilter:
    """
    Selects the objects of a page that are worth converting.

    An object is a candidate when it is a real object (not a directory
    marker), its key ends with ``source_extension`` (case-sensitive) and
    it is strictly larger than ``min_size_bytes``.
    """

    def __init__(self, source_extension: str = ".svg", min_size_bytes: int = 1024):
        self.source_extension = source_extension
        self.min_size_bytes = min_size_bytes

    def accepts(self, obj: ObjectDescriptor) -> bool:
        return (
            not obj.is_directory
            and obj.key.endswith(self.source_extension)
            and obj.size > self.min_size_bytes
        )

    def select(self, objects: Iterable[ObjectDescriptor]) -> List[ObjectDescriptor]:
        """Return the accepted objects in listing order."""
        return [obj for obj in objects if self.accepts(obj)]
