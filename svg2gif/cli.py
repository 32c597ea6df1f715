"""
svg2gif batch converter

Converts every SVG in an S3 bucket to a GIF written to a local directory.

Usage:
    # Convert the bucket configured in config.yaml
    svg2gif --config config.yaml

    # Override the bucket and output directory, and upload results too
    svg2gif --bucket chromatograms --output-path out/ --upload
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .batch import BatchProcessor, S3Client
from .config import AppConfig, ConfigError, load_config
from .utils import setup_logger


def create_s3_client(config: AppConfig) -> S3Client:
    """
    Create S3 client from configuration.

    Args:
        config: Application configuration

    Returns:
        S3Client instance
    """
    return S3Client(
        bucket_name=config.s3.bucket_name,
        region=config.s3.region,
        access_key_id=config.s3.access_key_id or None,
        secret_access_key=config.s3.secret_access_key or None,
        endpoint_url=config.s3.endpoint_url,
        prefix=config.s3.prefix,
        recursive=config.s3.recursive,
        page_size=config.s3.page_size
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svg2gif",
        description="Convert SVG objects stored in S3 to GIF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --config config.yaml
  %(prog)s --bucket chromatograms --output-path out/ --max-concurrent-jobs 8
        """
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to configuration file (default: config.yaml)"
    )
    parser.add_argument("--bucket", help="Bucket to convert (overrides s3.bucket_name)")
    parser.add_argument("--prefix", help="Only list keys under this prefix")
    parser.add_argument("--output-path", help="Directory converted files are written to")
    parser.add_argument(
        "--max-concurrent-jobs",
        type=int,
        help="Number of objects converted at the same time"
    )
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Also upload converted files back to the bucket"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level from config"
    )
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.bucket:
        config.s3.bucket_name = args.bucket
    if args.prefix is not None:
        config.s3.prefix = args.prefix
    if args.output_path:
        config.output_path = args.output_path
    if args.max_concurrent_jobs is not None:
        config.conversion.max_concurrent_jobs = args.max_concurrent_jobs
    if args.upload:
        config.conversion.upload_results = True
    if args.log_level:
        config.log_level = args.log_level
    return config


def main(argv: Optional[List[str]] = None, s3_client: Optional[S3Client] = None) -> int:
    """Main entry point for the batch converter."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args)
        config.validate()
    except ConfigError as e:
        parser.error(str(e))

    log_file = Path(config.log_file) if config.log_file else None
    try:
        logger = setup_logger("svg2gif", log_file=log_file, level=config.log_level)
    except ValueError as e:
        parser.error(str(e))

    if s3_client is None:
        s3_client = create_s3_client(config)
    logger.info(f"Initialized S3 client for bucket: {config.s3.bucket_name}")

    processor = BatchProcessor(config, s3_client, logger=logger)
    try:
        stats = processor.run_batch_job()
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Listing bucket {config.s3.bucket_name} failed, aborting run: {e}")
        return 1

    print("\n" + "=" * 60)
    print("BATCH JOB COMPLETE")
    print("=" * 60)
    print(f"Pages:      {stats.pages}")
    print(f"Candidates: {stats.candidates}")
    print(f"Converted:  {stats.converted}")
    print(f"Failed:     {stats.failed}")
    print(f"Skipped:    {stats.skipped}")
    print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
