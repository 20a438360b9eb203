"""
Image service - Listing and profile images in object storage.

Images have no fixture fallback: storage failures reach the caller.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from bookswap.config import StorageConfig
from bookswap.error_handling import ErrorHandler, InvalidInputError, NotFoundError
from bookswap.remote.client import RemoteDataClient
from bookswap.time_utils import epoch_millis

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, str, os.PathLike]


class ImageService:
    """Uploads and deletes images in a storage bucket"""

    def __init__(
        self,
        client: RemoteDataClient,
        storage: Optional[StorageConfig] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.client = client
        self.storage = storage or StorageConfig()
        self.error_handler = error_handler or ErrorHandler()

    @staticmethod
    def object_name(path: str) -> str:
        """Unique object name for an upload under ``path``."""
        return f"{path}_{epoch_millis()}.jpg"

    @staticmethod
    def _read_source(source: ImageSource) -> bytes:
        if isinstance(source, (bytes, bytearray)):
            return bytes(source)
        file_path = Path(source)
        if not file_path.is_file():
            raise NotFoundError(f"File does not exist: {file_path}")
        return file_path.read_bytes()

    async def upload_image(
        self,
        source: ImageSource,
        path: str,
        bucket: Optional[str] = None
    ) -> str:
        """
        Upload an image and return its public URL.

        Args:
            source: Image bytes or a local file path
            path: Object path prefix inside the bucket
            bucket: Bucket name; defaults to the configured image bucket

        Raises:
            NotFoundError: Local file does not exist
            InvalidInputError: Empty image
        """
        data = self._read_source(source)
        if not data:
            raise InvalidInputError("Image is empty")
        bucket = bucket or self.storage.image_bucket
        name = self.object_name(path)
        try:
            url = await self.client.upload_blob(bucket, name, data, self.storage.image_content_type)
        except Exception as e:
            self.error_handler.log_error("upload_image", e, bucket=bucket, path=name)
            raise
        logger.info(f"Uploaded {len(data)} bytes to {bucket}/{name}")
        return url

    async def delete_image(self, path: str, bucket: Optional[str] = None) -> None:
        """Remove an image object."""
        bucket = bucket or self.storage.image_bucket
        try:
            await self.client.delete_blob(bucket, path)
        except Exception as e:
            self.error_handler.log_error("delete_image", e, bucket=bucket, path=path)
            raise
        logger.info(f"Deleted {bucket}/{path}")
