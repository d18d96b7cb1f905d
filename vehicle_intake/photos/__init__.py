"""Photo pipeline: compression, storage backends and the per-marker manager."""

from .compression import ImageCompressor
from .storage import PhotoStorage, LocalPhotoStorage, S3PhotoStorage, create_photo_storage
from .manager import PhotoManager, PhotoBatchResult

__all__ = [
    'ImageCompressor',
    'PhotoStorage',
    'LocalPhotoStorage',
    'S3PhotoStorage',
    'create_photo_storage',
    'PhotoManager',
    'PhotoBatchResult'
]
