from .object_store import LocalObjectStore, ObjectStore, UploadError

__all__ = ["LocalObjectStore", "ObjectStore", "UploadError"]
