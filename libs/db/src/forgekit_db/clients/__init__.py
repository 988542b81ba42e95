"""Client wrappers for external services."""

from forgekit_db.clients.minio import MinIOBlobStore, StoredBlob

__all__ = [
    "MinIOBlobStore",
    "StoredBlob",
]
