"""
Pagination loop over a bucket listing.
"""

import logging
from typing import Callable, Optional

from .models import Page


class BatchCursor:
    """
    Walks a paginated listing one page at a time.

    ``list_page`` is called with the continuation token of the previous
    page (None for the first call) and ``process_page`` is called with
    every page before the next one is requested. The loop ends after the
    first page without a continuation token. Errors raised by either
    callable propagate to the caller.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.pages_seen = 0

    def run(
        self,
        list_page: Callable[[Optional[str]], Page],
        process_page: Callable[[Page], None]
    ) -> int:
        """
        Drive the listing until it is exhausted.

        Returns:
            Number of pages processed
        """
        token = None
        while True:
            page = list_page(token)
            self.pages_seen += 1
            self.logger.debug(f"Page {self.pages_seen}: {len(page.objects)} objects")

            process_page(page)

            if page.is_last:
                break
            token = page.next_token

        return self.pages_seen
