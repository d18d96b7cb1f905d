"""Damage photo storage backends."""

import asyncio
import logging
import secrets
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..models.photo import ImageFile, UploadResult
from ..utils.config import Config
from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_object_key(prefix: str, group_key: str, extension: str) -> str:
    """
    Storage key for a new photo.
    
    Layout: ``{prefix}/{group_key}/{epoch_ms}-{random}.{ext}``
    """
    filename = f"{int(time.time() * 1000)}-{secrets.token_hex(3)}.{extension}"
    return f"{prefix.strip('/')}/{group_key}/{filename}"


class PhotoStorage(ABC):
    """
    Contract for the photo storage collaborator.
    
    ``upload`` reports failures through ``UploadResult.error`` rather than
    raising. ``delete`` is best-effort and returns False on any failure.
    """
    
    @abstractmethod
    async def upload(self, file: ImageFile, group_key: str) -> UploadResult:
        ...
    
    @abstractmethod
    async def delete(self, path: str) -> bool:
        ...


class LocalPhotoStorage(PhotoStorage):
    """
    Filesystem-backed photo storage.
    
    Files are written below ``root_dir`` and exposed under ``public_base_url``
    using the same relative key, so a static file server mounted at the base
    URL serves them directly.
    """
    
    def __init__(
        self,
        root_dir: str = "data/damage-photos",
        public_base_url: str = "/damage-photos",
        key_prefix: str = "markers"
    ):
        """
        Initialize LocalPhotoStorage.
        
        Args:
            root_dir: Directory that receives uploaded photos
            public_base_url: URL prefix under which root_dir is served
            key_prefix: First path segment of every stored key
        """
        self.root_dir = Path(root_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.key_prefix = key_prefix
        
        self.root_dir.mkdir(parents=True, exist_ok=True)
        
        logger.info(
            f"Initialized LocalPhotoStorage: "
            f"root_dir={self.root_dir}, "
            f"public_base_url={self.public_base_url or '/'}"
        )
    
    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{path}"
    
    async def upload(self, file: ImageFile, group_key: str) -> UploadResult:
        """
        Save a photo under ``{key_prefix}/{group_key}/``.
        
        Args:
            file: Image to store
            group_key: Grouping key, the marker id
            
        Returns:
            UploadResult with the public URL and relative path, or an error
        """
        key = build_object_key(self.key_prefix, group_key, file.extension)
        target = self.root_dir / key
        
        try:
            await asyncio.to_thread(self._write, target, file.data)
        except OSError as e:
            logger.error(f"Failed to save photo {file.filename}: {str(e)}")
            return UploadResult.failure(str(e))
        
        logger.info(f"Saved photo: {target} ({file.size} bytes)")
        return UploadResult(url=self.public_url(key), path=key)
    
    async def delete(self, path: str) -> bool:
        target = self.root_dir / path
        
        if not target.exists():
            logger.warning(f"Photo does not exist, nothing to delete: {target}")
            return False
        
        try:
            await asyncio.to_thread(target.unlink)
            logger.info(f"Deleted photo: {target}")
            return True
        except OSError as e:
            logger.error(f"Failed to delete photo {target}: {str(e)}")
            return False
    
    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        # "xb" keeps an existing object from being overwritten
        with open(target, "xb") as f:
            f.write(data)


class S3PhotoStorage(PhotoStorage):
    """
    Amazon S3 photo storage.
    
    boto3 calls are blocking, so they run in a worker thread to keep the event
    loop free for the rest of the inspection UI.
    """
    
    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        public_base_url: str = "",
        key_prefix: str = "markers",
        client: Optional[Any] = None
    ):
        """
        Initialize S3PhotoStorage.
        
        Args:
            bucket: Target bucket name
            region: AWS region of the bucket
            public_base_url: Optional CDN or website URL; defaults to the
                virtual-hosted S3 endpoint
            key_prefix: First path segment of every stored key
            client: Optional pre-built boto3 S3 client
        """
        self.bucket = bucket
        self.region = region
        self.key_prefix = key_prefix
        self.public_base_url = (
            public_base_url.rstrip("/")
            or f"https://{bucket}.s3.{region}.amazonaws.com"
        )
        self.client = client or boto3.client("s3", region_name=region)
        
        logger.info(f"Initialized S3PhotoStorage: bucket={bucket}, region={region}")
    
    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{path}"
    
    async def upload(self, file: ImageFile, group_key: str) -> UploadResult:
        key = build_object_key(self.key_prefix, group_key, file.extension)
        
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=file.data,
                ContentType=file.content_type,
                CacheControl="max-age=3600",
            )
        except ClientError as e:
            error_info = e.response.get("Error", {})
            error_code = error_info.get("Code", "Unknown")
            error_message = error_info.get("Message", str(e))
            logger.warning(
                f"S3 upload failed for {file.filename}: "
                f"code={error_code}, message={error_message}"
            )
            return UploadResult.failure(error_message)
        except BotoCoreError as e:
            logger.warning(f"S3 upload failed for {file.filename}: {str(e)}")
            return UploadResult.failure(str(e))
        
        logger.info(f"Uploaded photo to s3://{self.bucket}/{key} ({file.size} bytes)")
        return UploadResult(url=self.public_url(key), path=key)
    
    async def delete(self, path: str) -> bool:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=path)
            logger.info(f"Deleted photo s3://{self.bucket}/{path}")
            return True
        except (ClientError, BotoCoreError) as e:
            # Best-effort delete
            logger.warning(f"Ignoring failed S3 delete for {path}: {str(e)}")
            return False


def create_photo_storage(config: Config, client: Optional[Any] = None) -> PhotoStorage:
    """
    Build the storage backend selected in configuration.
    
    Args:
        config: Loaded configuration
        client: Optional boto3 client, only used by the S3 backend
        
    Returns:
        PhotoStorage implementation
    """
    storage_config = config.storage
    
    if storage_config.backend == "local":
        return LocalPhotoStorage(
            root_dir=storage_config.local.root_dir,
            public_base_url=storage_config.local.public_base_url,
            key_prefix=storage_config.key_prefix,
        )
    
    if storage_config.backend == "s3":
        return S3PhotoStorage(
            bucket=storage_config.s3.bucket,
            region=storage_config.s3.region,
            public_base_url=storage_config.s3.public_base_url,
            key_prefix=storage_config.key_prefix,
            client=client,
        )
    
    raise ConfigurationError.invalid("storage.backend", f"unknown backend '{storage_config.backend}'")
