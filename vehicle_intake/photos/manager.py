"""Per-marker photo list: capacity, compression, upload and removal."""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..models.photo import ImageFile, PhotoItem
from ..utils.config import DEFAULT_ACCEPTED_CONTENT_TYPES
from ..utils.errors import Notice, PhotoProcessingError, handle_photo_error
from ..utils.logging import with_context
from .compression import ImageCompressor
from .storage import PhotoStorage

logger = logging.getLogger(__name__)

NoticeCallback = Callable[[Notice], None]
PhotosCallback = Callable[[List[PhotoItem]], None]


@dataclass
class PhotoBatchResult:
    """
    Outcome of one file selection.
    
    Attributes:
        added: Photos appended to the list, in selection order
        notices: User-facing notices raised while processing the batch
        dropped: Files skipped because the list was (or became) full
    """
    added: List[PhotoItem] = field(default_factory=list)
    notices: List[Notice] = field(default_factory=list)
    dropped: int = 0
    
    @property
    def failed(self) -> int:
        return sum(1 for notice in self.notices if notice.level == "error")


class PhotoManager:
    """
    Ordered list of up to ``max_photos`` photos for the marker being edited.
    
    Files are compressed and uploaded one at a time, in selection order. A
    failure on one file is converted into a notice and the loop moves on to
    the next, so a batch can partially succeed.
    """
    
    def __init__(
        self,
        storage: PhotoStorage,
        compressor: ImageCompressor,
        group_key: str,
        photos: Sequence[PhotoItem] = (),
        max_photos: int = 3,
        accepted_content_types: Optional[Sequence[str]] = None,
        notify: Optional[NoticeCallback] = None,
        on_change: Optional[PhotosCallback] = None
    ):
        """
        Initialize PhotoManager.
        
        Args:
            storage: Storage collaborator for uploads and deletes
            compressor: Compression collaborator applied before upload
            group_key: Storage grouping key, fixed for the editing session
            photos: Photos already attached to the marker
            max_photos: Per-marker capacity
            accepted_content_types: MIME types accepted for upload
            notify: Optional callback receiving each user-facing notice
            on_change: Optional callback receiving the new photo list
        """
        self.storage = storage
        self.compressor = compressor
        self.group_key = group_key
        self.max_photos = max_photos
        self.accepted_content_types = set(
            accepted_content_types
            if accepted_content_types is not None
            else DEFAULT_ACCEPTED_CONTENT_TYPES
        )
        self._photos: List[PhotoItem] = list(photos)[:max_photos]
        self._notify = notify
        self._on_change = on_change
        self.uploading = False
    
    @property
    def photos(self) -> List[PhotoItem]:
        return list(self._photos)
    
    def urls(self) -> List[str]:
        return [photo.url for photo in self._photos]
    
    @property
    def remaining_slots(self) -> int:
        return max(0, self.max_photos - len(self._photos))
    
    @property
    def can_add_more(self) -> bool:
        return self.remaining_slots > 0 and not self.uploading
    
    @with_context(component="photo_manager")
    async def add_files(self, files: Sequence[ImageFile]) -> PhotoBatchResult:
        """
        Compress and upload selected files, appending each success.
        
        Only the first ``remaining_slots`` files are processed; the rest are
        dropped with a single capacity notice.
        
        Args:
            files: Files in selection order
            
        Returns:
            PhotoBatchResult describing what was added and what failed
        """
        result = PhotoBatchResult()
        if not files:
            return result
        
        if self.uploading:
            logger.debug(f"Ignoring selection of {len(files)} files: upload in progress")
            result.dropped = len(files)
            return result
        
        remaining = self.remaining_slots
        to_process = list(files)[:remaining]
        result.dropped = len(files) - len(to_process)
        
        if result.dropped:
            error = PhotoProcessingError.capacity_reached(self.max_photos, dropped=result.dropped)
            logger.info(f"Photo capacity reached for {self.group_key}: dropped {result.dropped} files")
            self._raise_notice(result, Notice(level="error", message=error.context.message, context=error.context))
        
        if not to_process:
            return result
        
        logger.info(f"Processing {len(to_process)} photos for {self.group_key}")
        self.uploading = True
        try:
            for file in to_process:
                photo = await self._process_file(file, result)
                if photo is not None:
                    self._photos.append(photo)
                    result.added.append(photo)
        finally:
            self.uploading = False
        
        logger.info(
            f"Photo batch complete for {self.group_key}: "
            f"{len(result.added)} added, {result.failed} failed"
        )
        if result.added:
            self._emit()
        return result
    
    async def _process_file(self, file: ImageFile, result: PhotoBatchResult) -> Optional[PhotoItem]:
        if file.content_type not in self.accepted_content_types:
            error = PhotoProcessingError.unsupported_type(file.filename, file.content_type)
            self._raise_notice(result, handle_photo_error(error, file.filename, logger))
            return None
        
        try:
            compressed = await self.compressor.compress(file)
        except Exception as e:
            self._raise_notice(result, handle_photo_error(e, file.filename, logger, stage="compress"))
            return None
        
        try:
            upload = await self.storage.upload(compressed, self.group_key)
        except Exception as e:
            self._raise_notice(result, handle_photo_error(e, file.filename, logger, stage="upload"))
            return None
        
        if not upload.ok:
            error = PhotoProcessingError.upload_failed(file.filename, reason=upload.error)
            self._raise_notice(result, handle_photo_error(error, file.filename, logger))
            return None
        
        logger.debug(f"Uploaded {file.filename} -> {upload.path}")
        return PhotoItem(url=upload.url, storage_path=upload.path)
    
    async def remove(self, index: int) -> bool:
        """
        Remove the photo at ``index``.
        
        Photos uploaded in this session are also deleted from storage on a
        best-effort basis; the local list is updated whatever the outcome.
        
        Returns:
            False when ``index`` is out of range
        """
        if index < 0 or index >= len(self._photos):
            logger.debug(f"Ignoring remove of photo index {index}: out of range")
            return False
        
        photo = self._photos[index]
        if photo.storage_path:
            try:
                deleted = await self.storage.delete(photo.storage_path)
            except Exception as e:
                logger.warning(f"Ignoring failed delete of {photo.storage_path}: {str(e)}")
                deleted = False
            if not deleted:
                logger.debug(f"Photo {photo.storage_path} left in storage")
        
        # The list may have changed while the delete was pending
        if photo in self._photos:
            self._photos.remove(photo)
            self._emit()
        return True
    
    def _raise_notice(self, result: PhotoBatchResult, notice: Notice) -> None:
        result.notices.append(notice)
        if self._notify is not None:
            self._notify(notice)
    
    def _emit(self) -> None:
        if self._on_change is not None:
            self._on_change(self.photos)
