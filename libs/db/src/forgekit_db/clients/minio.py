"""MinIO/S3 blob store used for owner image uploads."""

import asyncio
from dataclasses import dataclass
from io import BytesIO

import structlog
from minio import Minio
from minio.error import S3Error

logger = structlog.get_logger(__name__)


@dataclass
class StoredBlob:
    """Information about an uploaded blob."""

    bucket: str
    key: str
    size: int
    url: str
    content_type: str | None = None


class MinIOBlobStore:
    """
    Uploads files to one MinIO bucket and hands back their public URL.

    The MinIO SDK is blocking, so every call runs in a worker thread.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        public_url: str | None = None,
        secure: bool = False,
    ):
        """
        Initialize the blob store.

        Args:
            endpoint: MinIO server endpoint (e.g., "localhost:9000")
            access_key: Access key for authentication
            secret_key: Secret key for authentication
            bucket: Bucket uploads are written to
            public_url: Base URL objects are served from; defaults to the
                endpoint itself
            secure: Whether to use HTTPS
        """
        self._client = Minio(
            endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )
        self.bucket = bucket
        scheme = "https" if secure else "http"
        self._public_url = (public_url or f"{scheme}://{endpoint}").rstrip("/")
        self._log = logger.bind(service="minio", endpoint=endpoint, bucket=bucket)

    def url_for(self, key: str) -> str:
        """Public URL of an object in the upload bucket."""
        return f"{self._public_url}/{self.bucket}/{key}"

    async def ensure_bucket(self) -> bool:
        """
        Ensure the upload bucket exists, creating it if necessary.

        Returns:
            True if bucket was created, False if it already existed
        """

        def _ensure() -> bool:
            if not self._client.bucket_exists(self.bucket):
                self._client.make_bucket(self.bucket)
                return True
            return False

        try:
            created = await asyncio.to_thread(_ensure)
        except S3Error as e:
            self._log.error("bucket_ensure_failed", error=str(e))
            raise
        if created:
            self._log.info("bucket_created")
        return created

    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> StoredBlob:
        """
        Upload bytes under ``key``.

        Args:
            key: Object key (path in bucket)
            data: File content
            content_type: MIME type of the object

        Returns:
            StoredBlob with the object's public URL
        """
        await self.ensure_bucket()
        try:
            await asyncio.to_thread(
                self._client.put_object,
                self.bucket,
                key,
                BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
        except S3Error as e:
            self._log.error("blob_upload_failed", key=key, error=str(e))
            raise

        self._log.info("blob_uploaded", key=key, size=len(data))
        return StoredBlob(
            bucket=self.bucket,
            key=key,
            size=len(data),
            url=self.url_for(key),
            content_type=content_type,
        )

    async def health_check(self) -> bool:
        """
        Check if MinIO is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            await asyncio.to_thread(self._client.bucket_exists, self.bucket)
            return True
        except Exception as e:
            self._log.warning("health_check_failed", error=str(e))
            return False
