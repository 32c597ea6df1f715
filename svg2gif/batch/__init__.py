"""
Batch processing module for svg2gif.

Provides the S3 listing gateway, candidate selection, the bounded worker
pool and the per-object conversion task.
"""

from .cursor import BatchCursor
from .filters import CandidateFilter
from .models import ConversionResult, ObjectDescriptor, Page, ResultStatus
from .pool import ConversionWorkerPool
from .processor import BatchProcessor, BatchStats
from .s3_client import S3Client
from .task import ConversionTask, derive_output_name

__all__ = [
    "BatchCursor",
    "BatchProcessor",
    "BatchStats",
    "CandidateFilter",
    "ConversionResult",
    "ConversionTask",
    "ConversionWorkerPool",
    "ObjectDescriptor",
    "Page",
    "ResultStatus",
    "S3Client",
    "derive_output_name",
]
