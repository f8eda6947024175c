"""Profile photo uploads to S3."""

import logging
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from backend.core import config
from backend.core.errors import IntegrationError

logger = logging.getLogger(__name__)


class PhotoStorage:
    def __init__(self, bucket: str, client=None, region: str | None = None):
        self.bucket = bucket
        self.region = region or config.AWS_REGION
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client('s3', region_name=self.region)
        return self._client

    def object_url(self, key: str) -> str:
        return f'https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}'

    def upload(self, key: str, body: bytes, content_type: str | None = None) -> str:
        """Store ``body`` under ``key`` and return the object's URL."""
        if not self.bucket:
            raise IntegrationError('S3_BUCKET_NAME is not configured.')

        extra = {'ContentType': content_type} if content_type else {}
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=body, **extra)
        except (BotoCoreError, ClientError) as exc:
            logger.exception('Upload of %s to bucket %s failed', key, self.bucket)
            raise IntegrationError(str(exc)) from exc

        return self.object_url(key)
