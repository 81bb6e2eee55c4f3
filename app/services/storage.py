import logging
import os
import re
import uuid
from datetime import timedelta
from typing import BinaryIO, Iterator, Optional
from minio import Minio
from minio.error import S3Error
from app.core.config import get_settings
from app.exceptions import StorageObjectNotFoundError

settings = get_settings()
logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = {"NoSuchKey", "NoSuchObject", "NoSuchBucket"}
STREAM_CHUNK_SIZE = 64 * 1024


def sanitize_file_name(file_name: str) -> str:
    """
    Reduce a client-supplied file name to a safe object-name suffix.

    Drops any directory part, keeps letters, digits, dots, dashes and
    underscores, turns whitespace runs into underscores and lower-cases the
    extension. Returns "document" if nothing usable is left.
    """
    base = os.path.basename(file_name.replace("\\", "/"))
    stem, ext = os.path.splitext(base)
    stem = re.sub(r"\s+", "_", re.sub(r"[^A-Za-z0-9_\- ]", "", stem).strip())
    ext = re.sub(r"[^A-Za-z0-9.]", "", ext).lower()
    return f"{stem or 'document'}{ext}"


class StorageService:
    def __init__(self, bucket_name: str | None = None):
        self.client = Minio(
            settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY.get_secret_value(),
            secure=settings.MINIO_SECURE,
            region=settings.MINIO_REGION,
        )
        self.bucket_name = bucket_name or settings.VERIFICATION_BUCKET

    def ensure_bucket_exists(self):
        """
        Checks if the bucket exists; creates it if not.
        Run this on app startup.
        """
        try:
            if not self.client.bucket_exists(self.bucket_name):
                self.client.make_bucket(self.bucket_name)
                logger.info(f"Bucket '{self.bucket_name}' created successfully.")
            else:
                logger.debug(f"Bucket '{self.bucket_name}' already exists.")
        except S3Error as e:
            logger.error(f"Error checking/creating bucket: {e}")
            raise

    def upload_file(
        self,
        file_data: BinaryIO,
        file_name: str,
        content_type: str,
        size: int = -1,
        owner_id: int | None = None,
    ) -> str:
        """
        Upload a file under a fresh, unique key and return that key.

        Keys look like `<owner_id>/<hex>_<sanitized name>` so a resubmission
        never overwrites the artifact still referenced by the current record.
        """
        if not file_data:
            raise ValueError("file_data cannot be None")
        if not file_name or not file_name.strip():
            raise ValueError("file_name cannot be empty")

        prefix = f"{owner_id}/" if owner_id is not None else ""
        object_name = f"{prefix}{uuid.uuid4().hex}_{sanitize_file_name(file_name)}"

        try:
            self.client.put_object(
                bucket_name=self.bucket_name,
                object_name=object_name,
                data=file_data,
                length=size,
                content_type=content_type,
                # Part size 10MB ensures better performance for larger files
                part_size=10 * 1024 * 1024,
            )
            logger.info(f"File '{object_name}' uploaded successfully.")
            return object_name
        except S3Error as e:
            logger.error(f"Failed to upload file to MinIO: {e}")
            raise

    def get_presigned_url(
        self, object_name: str, expires_in_hours: int = 1
    ) -> Optional[str]:
        """
        Generate a temporary GET link for a stored object, or None on failure.
        """
        if not object_name:
            return None
        try:
            return self.client.presigned_get_object(
                bucket_name=self.bucket_name,
                object_name=object_name,
                expires=timedelta(hours=expires_in_hours),
            )
        except S3Error as e:
            logger.error(f"Failed to generate presigned URL: {e}")
            return None

    def delete_file(self, object_name: str) -> bool:
        """
        Release a stored object.

        Returns:
            bool: True if the object existed and was removed, False if it was
            already gone or the store refused the request. Never raises S3Error.
        """
        try:
            self.client.stat_object(self.bucket_name, object_name)
        except S3Error as e:
            if e.code in MISSING_OBJECT_CODES:
                logger.warning(f"File '{object_name}' already absent from storage.")
            else:
                logger.error(f"Failed to inspect file '{object_name}': {e}")
            return False
        try:
            self.client.remove_object(self.bucket_name, object_name)
            logger.info(f"File '{object_name}' deleted.")
            return True
        except S3Error as e:
            logger.error(f"Failed to delete file: {e}")
            return False

    def open_stream(self, object_name: str) -> Iterator[bytes]:
        """
        Open a stored object for reading.

        The object is requested eagerly so a missing artifact is reported
        before any byte is sent; the returned iterator then yields chunks and
        releases the connection when exhausted or closed.

        Raises:
            StorageObjectNotFoundError: If the object (or its bucket) does not exist.
        """
        try:
            response = self.client.get_object(self.bucket_name, object_name)
        except S3Error as e:
            if e.code in MISSING_OBJECT_CODES:
                raise StorageObjectNotFoundError(object_name) from e
            logger.error(f"Failed to read file '{object_name}': {e}")
            raise

        def _iter_chunks() -> Iterator[bytes]:
            try:
                yield from response.stream(STREAM_CHUNK_SIZE)
            finally:
                response.close()
                response.release_conn()

        return _iter_chunks()


# Singleton instance to be imported elsewhere
storage_service = StorageService()
