"""
S3 client for the batch converter.

Provides paginated listing of a bucket plus whole-object download and
upload through in-memory buffers.
"""

import logging
from typing import Optional

import boto3

from .models import ObjectDescriptor, Page


class S3Client:
    """
    S3 client for file operations.

    Listing errors are not caught here: a bucket that cannot be listed
    means the run cannot proceed, so the botocore exception reaches the
    caller. Download and upload errors also propagate and are handled
    per item by the conversion task.
    """

    def __init__(
        self,
        bucket_name: str,
        region: str = "us-east-1",
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        prefix: str = "",
        recursive: bool = True,
        page_size: int = 100,
        client=None
    ):
        """
        Initialize S3 client.

        Args:
            bucket_name: S3 bucket name
            region: AWS region
            access_key_id: AWS access key ID (optional, uses env vars if not provided)
            secret_access_key: AWS secret access key (optional)
            endpoint_url: Custom endpoint URL for MinIO or other S3-compatible stores
            prefix: Key prefix every listing is restricted to
            recursive: List the whole key space under ``prefix`` instead of one level
            page_size: Maximum number of keys per listing call
            client: Pre-built boto3 S3 client (skips session setup)
        """
        self.bucket_name = bucket_name
        self.prefix = prefix
        self.recursive = recursive
        self.page_size = page_size
        self.logger = logging.getLogger(__name__)

        if client is None:
            session_kwargs = {'region_name': region}
            if access_key_id and secret_access_key:
                session_kwargs['aws_access_key_id'] = access_key_id
                session_kwargs['aws_secret_access_key'] = secret_access_key
            client = boto3.client('s3', endpoint_url=endpoint_url, **session_kwargs)

        self.s3 = client

    def list_page(self, continuation_token: Optional[str] = None) -> Page:
        """
        Fetch one page of the bucket listing.

        Args:
            continuation_token: Token returned with the previous page, None for the first page

        Returns:
            Page with the listed objects and the token for the next call
        """
        params = {
            'Bucket': self.bucket_name,
            'Prefix': self.prefix,
            'MaxKeys': self.page_size,
        }
        if not self.recursive:
            params['Delimiter'] = '/'
        if continuation_token:
            params['ContinuationToken'] = continuation_token

        response = self.s3.list_objects_v2(**params)

        objects = []
        for prefix_obj in response.get('CommonPrefixes', []):
            objects.append(ObjectDescriptor(key=prefix_obj['Prefix'], size=0, is_directory=True))
        for obj in response.get('Contents', []):
            key = obj['Key']
            # Console-created "folders" are zero-byte keys ending in '/'
            objects.append(ObjectDescriptor(
                key=key,
                size=obj.get('Size', 0),
                is_directory=key.endswith('/')
            ))

        next_token = None
        if response.get('IsTruncated'):
            next_token = response.get('NextContinuationToken') or None

        self.logger.debug(
            f"Listed {len(objects)} objects from s3://{self.bucket_name}/{self.prefix} "
            f"(more: {next_token is not None})"
        )
        return Page(objects=tuple(objects), next_token=next_token)

    def download_bytes(self, key: str) -> bytes:
        """
        Download a whole object into memory.

        Args:
            key: S3 object key

        Returns:
            Object contents
        """
        response = self.s3.get_object(Bucket=self.bucket_name, Key=key)
        body = response['Body']
        try:
            data = body.read()
        finally:
            body.close()
        self.logger.debug(f"Downloaded {key} ({len(data)} bytes)")
        return data

    def upload_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        """
        Upload an in-memory buffer as a new object.

        Args:
            key: S3 object key to upload to
            data: Object contents
            content_type: Optional Content-Type header

        Returns:
            The key the object was written to
        """
        params = {'Bucket': self.bucket_name, 'Key': key, 'Body': data}
        if content_type:
            params['ContentType'] = content_type
        self.s3.put_object(**params)
        self.logger.info(f"Uploaded {key} to s3://{self.bucket_name}")
        return key
