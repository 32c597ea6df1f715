"""
Batch processor for svg2gif.

Wires the listing cursor, candidate filter and worker pool together and
keeps the per-run statistics.
"""

import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from ..config.settings import AppConfig
from ..imaging.raster import RasterConverter
from .cursor import BatchCursor
from .filters import CandidateFilter
from .models import Page
from .pool import ConversionWorkerPool
from .task import ConversionTask


@dataclass
class BatchStats:
    """Counters for one run."""
    pages: int = 0
    listed: int = 0
    candidates: int = 0
    converted: int = 0
    failed: int = 0
    skipped: int = 0
    elapsed_seconds: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


class BatchProcessor:
    """
    Batch processor for SVG to GIF conversion.

    Lists the bucket page by page, converts the eligible objects of each
    page with a bounded worker pool and waits for the page to finish
    before asking for the next one.
    """

    def __init__(
        self,
        config: AppConfig,
        gateway,
        converter=None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize batch processor.

        Args:
            config: Application configuration
            gateway: Object store client (normally an S3Client)
            converter: Raster converter; built from ``config.conversion`` when omitted
            logger: Sink for progress and failure records
        """
        self.config = config
        self.gateway = gateway
        self.logger = logger or logging.getLogger(__name__)

        conv = config.conversion
        self.converter = converter or RasterConverter(
            density=conv.density,
            max_width=conv.max_width,
            target_format=conv.target_format
        )
        self.candidate_filter = CandidateFilter(
            source_extension=conv.source_extension,
            min_size_bytes=conv.min_size_bytes
        )
        self.task = ConversionTask(
            gateway=gateway,
            converter=self.converter,
            output_dir=Path(config.output_path),
            source_extension=conv.source_extension,
            target_extension=conv.target_extension,
            upload=conv.upload_results,
            logger=self.logger
        )
        self.stats = BatchStats()

    def _process_page(self, pool: ConversionWorkerPool, page: Page) -> None:
        candidates = self.candidate_filter.select(page.objects)

        self.stats.pages += 1
        self.stats.listed += len(page.objects)
        self.stats.candidates += len(candidates)
        self.stats.skipped += len(page.objects) - len(candidates)

        if not candidates:
            self.logger.info(f"Page {self.stats.pages}: no candidates among {len(page.objects)} objects")
            return

        self.logger.info(f"Page {self.stats.pages}: converting {len(candidates)} of {len(page.objects)} objects")
        for result in pool.process_page(candidates):
            if result.ok:
                self.stats.converted += 1
            else:
                self.stats.failed += 1

    def run_batch_job(self) -> BatchStats:
        """
        Convert every eligible object in the bucket.

        Listing errors are not caught and abort the run.

        Returns:
            Statistics for the run
        """
        start_time = time.time()
        self.stats = BatchStats()
        self.logger.info("=" * 60)
        self.logger.info("Starting batch job")
        self.logger.info("=" * 60)

        cursor = BatchCursor(logger=self.logger)
        with ConversionWorkerPool(
            self.task,
            max_concurrent_jobs=self.config.conversion.max_concurrent_jobs,
            logger=self.logger
        ) as pool:
            cursor.run(self.gateway.list_page, lambda page: self._process_page(pool, page))

        self.stats.elapsed_seconds = time.time() - start_time
        self.logger.info("=" * 60)
        self.logger.info("Batch job complete")
        self.logger.info(f"Elapsed time: {self.stats.elapsed_seconds:.2f}s")
        self.logger.info(f"Results: {self.stats.as_dict()}")
        self.logger.info("=" * 60)

        return self.stats
