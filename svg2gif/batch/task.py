"""
Conversion of a single bucket object.
"""

import logging
import mimetypes
import os
from pathlib import Path
from typing import Optional

from .models import ConversionResult, ObjectDescriptor


def derive_output_name(key: str, source_extension: str, target_extension: str) -> str:
    """
    Swap the source extension of ``key`` for the target extension.

    The rest of the key, directories included, is left as is:
    ``charts/run1.svg`` becomes ``charts/run1.gif``.
    """
    if source_extension and key.endswith(source_extension):
        return key[:-len(source_extension)] + target_extension
    stem, _ = os.path.splitext(key)
    return stem + target_extension


class ConversionTask:
    """
    Downloads, converts and stores one object.

    ``execute`` never raises: any error is logged with the object key and
    returned as a failed ConversionResult so that the rest of the batch
    keeps going.
    """

    def __init__(
        self,
        gateway,
        converter,
        output_dir: Path,
        source_extension: str = ".svg",
        target_extension: str = ".gif",
        upload: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            gateway: Object store with ``download_bytes`` and ``upload_bytes``
            converter: Object with ``convert(bytes) -> bytes``
            output_dir: Local directory converted files are written under
            source_extension: Extension replaced in the output name
            target_extension: Extension of the output name
            upload: Also store the converted file back in the bucket
            logger: Sink for progress and failure records
        """
        self.gateway = gateway
        self.converter = converter
        self.output_dir = Path(output_dir)
        self.source_extension = source_extension
        self.target_extension = target_extension
        self.upload = upload
        self.logger = logger or logging.getLogger(__name__)

    def local_path(self, output_name: str) -> Path:
        """Resolve where ``output_name`` is written, refusing keys that climb out of ``output_dir``."""
        base = self.output_dir.resolve()
        target = (base / output_name.lstrip('/')).resolve()
        if base != target and base not in target.parents:
            raise ValueError(f"Output name escapes output directory: {output_name}")
        return target

    def _write_local(self, output_name: str, data: bytes) -> Path:
        path = self.local_path(output_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        partial = path.with_name(path.name + '.part')
        try:
            partial.write_bytes(data)
            os.replace(partial, path)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        return path

    def execute(self, candidate: ObjectDescriptor) -> ConversionResult:
        """
        Convert one candidate object.

        Args:
            candidate: Object that passed the candidate filter

        Returns:
            ConversionResult, converted or failed
        """
        key = candidate.key
        output_name = derive_output_name(key, self.source_extension, self.target_extension)

        try:
            source = self.gateway.download_bytes(key)
            data = self.converter.convert(source)
            path = self._write_local(output_name, data)

            if self.upload:
                content_type, _ = mimetypes.guess_type(output_name)
                self.gateway.upload_bytes(output_name, data, content_type=content_type)

        except Exception as e:
            self.logger.error(f"Error converting {key}: {e}", exc_info=True)
            return ConversionResult.failed(key, str(e) or type(e).__name__, output_name=output_name)

        self.logger.info(f"Converted {key} -> {path}")
        return ConversionResult.converted(key, output_name, len(data))
