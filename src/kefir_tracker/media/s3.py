"""
Module: s3.py
Description: S3 client for batch photo storage.

Photo bytes never pass through the API; clients upload and download
directly with presigned URLs generated here.

Key Components:
- PhotoStorageClient: Photo key derivation and presigned URL generation

Dependencies: boto3, botocore, time
Author: Kefir Tracker Team
"""

import time
from typing import List, Optional

import boto3
from botocore.exceptions import ClientError

from kefir_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class PhotoStorageClient:
    """
    Presigned URL generator for the photos bucket.

    Attributes:
        bucket_name: Name of the S3 bucket
        expires_in: Lifetime of generated URLs in seconds
        s3: boto3 S3 client
    """

    def __init__(
        self,
        bucket_name: str,
        region_name: Optional[str] = None,
        expires_in: int = 3600,
        endpoint_url: Optional[str] = None
    ):
        if not bucket_name or not isinstance(bucket_name, str):
            raise ValueError("bucket_name must be a non-empty string")

        self.bucket_name = bucket_name
        self.expires_in = expires_in
        self.s3 = boto3.client('s3', region_name=region_name, endpoint_url=endpoint_url)

        logger.info(
            "Photo storage client initialized",
            bucket_name=bucket_name
        )

    @staticmethod
    def photo_key_prefix(user_id: str, batch_id: str) -> str:
        """Prefix every photo key of a batch starts with."""
        return f"users/{user_id}/batches/{batch_id}/"

    def generate_photo_key(self, user_id: str, batch_id: str, filename: str = "photo.jpg") -> str:
        """
        Derive a storage key for a new photo.

        The extension comes from the filename (``jpg`` when it has none);
        the base name is the current epoch time in milliseconds.
        """
        extension = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
        extension = extension or 'jpg'
        return f"{self.photo_key_prefix(user_id, batch_id)}{int(time.time() * 1000)}.{extension}"

    def get_upload_url(self, key: str, content_type: str = "image/jpeg") -> str:
        """
        Presigned PUT URL for one object.

        Raises:
            ClientError: If URL generation fails
        """
        try:
            return self.s3.generate_presigned_url(
                'put_object',
                Params={'Bucket': self.bucket_name, 'Key': key, 'ContentType': content_type},
                ExpiresIn=self.expires_in
            )
        except ClientError as e:
            logger.error(
                "Failed to generate upload URL",
                key=key,
                bucket_name=self.bucket_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    def get_download_url(self, key: str) -> str:
        """
        Presigned GET URL for one object.

        Raises:
            ClientError: If URL generation fails
        """
        try:
            return self.s3.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket_name, 'Key': key},
                ExpiresIn=self.expires_in
            )
        except ClientError as e:
            logger.error(
                "Failed to generate download URL",
                key=key,
                bucket_name=self.bucket_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    def get_download_urls(self, keys: List[str]) -> List[str]:
        return [self.get_download_url(key) for key in keys]
