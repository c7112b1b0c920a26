# azure_blob.py
"""
Azure Blob Storage helpers for uploaded files (PDC scans, proofs of
payment, maintenance and announcement photos, lease documents).
"""
import logging
import os
import uuid
from functools import lru_cache

from azure.storage.blob import BlobServiceClient, ContentSettings

logger = logging.getLogger(__name__)

account = os.getenv("AZURE_STORAGE_ACCOUNT")
key = os.getenv("AZURE_STORAGE_KEY")
CONTAINER = os.getenv("AZURE_STORAGE_CONTAINER", "upkyp")


@lru_cache(maxsize=1)
def get_blob_service() -> BlobServiceClient:
     return BlobServiceClient.from_connection_string(
          f"DefaultEndpointsProtocol=https;"
          f"AccountName={account};"
          f"AccountKey={key};"
          f"EndpointSuffix=core.windows.net"
     )


def _blob_url(blob_name: str) -> str:
     return f"https://{account}.blob.core.windows.net/{CONTAINER}/{blob_name}"


def upload_to_blob(file, folder: str, owner_id: str | int):
     """Upload a FastAPI UploadFile under folder/owner_id/ and return its URL."""
     ext = os.path.splitext(file.filename or "")[1] or ".jpg"
     filename = f"{folder}/{owner_id}/{uuid.uuid4()}{ext}"
     blob_client = get_blob_service().get_blob_client(container=CONTAINER, blob=filename)
     content_type = getattr(file, "content_type", None)
     blob_client.upload_blob(
          file.file,
          overwrite=True,
          content_settings=ContentSettings(content_type=content_type) if content_type else None,
     )
     logger.info("Uploaded %s", filename)
     return _blob_url(filename)


def upload_bytes(data: bytes, blob_name: str, content_type: str = "application/octet-stream"):
     blob_client = get_blob_service().get_blob_client(container=CONTAINER, blob=blob_name)
     blob_client.upload_blob(
          data,
          overwrite=True,
          content_settings=ContentSettings(content_type=content_type),
     )
     logger.info("Uploaded %s", blob_name)
     return _blob_url(blob_name)


def delete_from_blob(blob_url: str):
     """
     Deletes a file from Azure Blob Storage using its full URL
     """
     prefix = f"/{CONTAINER}/"
     blob_name = blob_url.split(prefix, 1)[-1]
     blob_client = get_blob_service().get_blob_client(
          container=CONTAINER,
          blob=blob_name
     )
     blob_client.delete_blob()
     logger.info("Deleted %s", blob_name)
