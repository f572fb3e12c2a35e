"""Image stores: accept uploaded image bytes, return a retrievable URL."""

import logging
import os
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings
from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage

from events.domain.errors import ImageUploadError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


@dataclass(frozen=True)
class ImageUpload:
    """An image received from a client, fully read into memory."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        ext = os.path.splitext(self.filename)[1].lower()
        return ext if ext in ALLOWED_EXTENSIONS else ""

    def blob_name(self, folder: str) -> str:
        return f"{folder}/{uuid.uuid4().hex}{self.extension}"


class ImageStore(ABC):
    """Interface for durable image storage."""

    @abstractmethod
    def upload(self, image: ImageUpload) -> str:
        """Store the image and return its public URL.

        Raises:
            ImageUploadError: If the backing service rejects the upload.
        """
        ...


class AzureBlobImageStore(ImageStore):
    """Stores images in an Azure Blob Storage container."""

    def __init__(self, connection_string: str, container: str, folder: str = "events") -> None:
        self._connection_string = connection_string
        self._container = container
        self._folder = folder
        self._container_client: ContainerClient | None = None

    def _get_container(self) -> ContainerClient:
        if self._container_client is None:
            if not self._connection_string:
                raise ImageUploadError("Azure storage connection string is not configured")
            service = BlobServiceClient.from_connection_string(self._connection_string)
            container = service.get_container_client(self._container)
            try:
                container.create_container(public_access="blob")
                logger.info(f"Created image container {self._container}")
            except ResourceExistsError:
                logger.debug(f"Image container {self._container} already exists")
            self._container_client = container
        return self._container_client

    def upload(self, image: ImageUpload) -> str:
        name = image.blob_name(self._folder)
        try:
            blob = self._get_container().get_blob_client(name)
            blob.upload_blob(
                image.content,
                overwrite=True,
                content_settings=ContentSettings(content_type=image.content_type),
            )
        except (AzureError, ValueError) as exc:
            raise ImageUploadError(f"Azure blob upload failed: {exc}") from exc
        logger.info(f"Uploaded image {name} ({len(image.content)} bytes)")
        return blob.url


class StorageImageStore(ImageStore):
    """Stores images through a Django storage backend (local media by default)."""

    def __init__(self, storage: Storage | None = None, folder: str = "events") -> None:
        self._storage = storage or default_storage
        self._folder = folder

    def upload(self, image: ImageUpload) -> str:
        try:
            name = self._storage.save(image.blob_name(self._folder), ContentFile(image.content))
        except OSError as exc:
            raise ImageUploadError(f"Image storage failed: {exc}") from exc
        logger.info(f"Stored image {name} ({len(image.content)} bytes)")
        return self._storage.url(name)
