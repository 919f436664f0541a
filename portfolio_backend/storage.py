"""
Storage abstraction for the asset bucket: Firebase Storage, S3-compatible
endpoints and in-memory testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import boto3
from botocore.config import Config
import firebase_admin
from firebase_admin import credentials, storage


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def delete_object(self, path: str) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    stored_objects: dict = None
    deleted_paths: list = None

    def __post_init__(self):
        if self.stored_objects is None:
            self.stored_objects = {}
        if self.deleted_paths is None:
            self.deleted_paths = []

    def put_bytes(self, path: str, data: bytes) -> None:
        self.stored_objects[path] = data

    def delete_object(self, path: str) -> None:
        if path not in self.stored_objects:
            raise FileNotFoundError(path)
        del self.stored_objects[path]
        self.deleted_paths.append(path)


@dataclass
class FirebaseStorageClient:
    """
    Firebase Storage client backed by a dedicated firebase_admin app.
    """

    credentials_info: dict
    bucket_name: str
    app_name: str = "portfolio-storage"

    def __post_init__(self):
        try:
            self._app = firebase_admin.get_app(self.app_name)
        except ValueError:
            self._app = firebase_admin.initialize_app(
                credentials.Certificate(self.credentials_info),
                {"storageBucket": self.bucket_name},
                name=self.app_name,
            )
        self._bucket = storage.bucket(app=self._app)

    def delete_object(self, path: str) -> None:
        # Raises google.api_core.exceptions.NotFound for missing objects.
        self._bucket.blob(path).delete()


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client, e.g. the GCS interoperability endpoint
    serving the same bucket with HMAC keys.
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str

    def __post_init__(self):
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def delete_object(self, path: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=path)
