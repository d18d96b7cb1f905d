"""Marker editor: transient form state for one damage marker."""

import logging
from typing import List, Optional, Sequence

from ..models.inspection import (
    DEFAULT_DAMAGE_TYPE,
    DEFAULT_SEVERITY,
    DamageSeverity,
    DamageType,
    MarkerAttributes,
    new_id,
)
from ..models.photo import ImageFile, PhotoItem
from ..models.vocabulary import (
    DAMAGE_SEVERITY_COLORS,
    DAMAGE_SEVERITY_LABELS,
    DAMAGE_TYPE_LABELS,
)
from ..photos.compression import ImageCompressor
from ..photos.manager import NoticeCallback, PhotoBatchResult, PhotoManager
from ..photos.storage import PhotoStorage
from ..utils.config import PhotoConfig
from ..utils.logging import set_context

logger = logging.getLogger(__name__)

TITLE_EDIT = "Editar daño"
TITLE_CREATE = "Registrar daño"


class MarkerEditor:
    """
    Modal editing surface for a marker's descriptive fields and photos.
    
    Every call to :meth:`open` starts a new session: all fields are
    re-initialized from the supplied attributes (or defaults) and a fresh
    photo manager is created, even when the same data is opened twice.
    The editor never sees a marker's id, view or position; :meth:`save`
    returns only :class:`MarkerAttributes`.
    """
    
    def __init__(
        self,
        storage: PhotoStorage,
        compressor: ImageCompressor,
        photo_config: Optional[PhotoConfig] = None,
        notify: Optional[NoticeCallback] = None
    ):
        self.storage = storage
        self.compressor = compressor
        self.photo_config = photo_config or PhotoConfig()
        self.notify = notify
        
        self.is_open = False
        self.is_editing = False
        self.session = 0
        self.group_key: Optional[str] = None
        self.damage_type: DamageType = DEFAULT_DAMAGE_TYPE
        self.severity: DamageSeverity = DEFAULT_SEVERITY
        self.description = ""
        self.photos: Optional[PhotoManager] = None
        self._uploaded_paths: List[str] = []
    
    @property
    def title(self) -> str:
        return TITLE_EDIT if self.is_editing else TITLE_CREATE
    
    @staticmethod
    def damage_type_options():
        return [(damage_type, DAMAGE_TYPE_LABELS[damage_type]) for damage_type in DamageType]
    
    @staticmethod
    def severity_options():
        return [
            (severity, DAMAGE_SEVERITY_LABELS[severity], DAMAGE_SEVERITY_COLORS[severity])
            for severity in DamageSeverity
        ]
    
    def open(
        self,
        initial: Optional[MarkerAttributes] = None,
        group_key: Optional[str] = None
    ) -> int:
        """
        Start a new editing session.
        
        Args:
            initial: Attributes of the marker being edited, None to create
            group_key: Photo storage grouping key; the marker id when editing.
                A fresh id is generated when omitted.
                
        Returns:
            The new session number
        """
        self.session += 1
        self.is_open = True
        self.is_editing = initial is not None
        self.group_key = group_key or new_id()
        
        attributes = initial or MarkerAttributes()
        self.damage_type = attributes.damage_type
        self.severity = attributes.severity
        self.description = attributes.description
        self._uploaded_paths = []
        self.photos = PhotoManager(
            storage=self.storage,
            compressor=self.compressor,
            group_key=self.group_key,
            photos=[PhotoItem(url=url) for url in attributes.photo_urls],
            max_photos=self.photo_config.max_per_marker,
            accepted_content_types=self.photo_config.accepted_content_types,
            notify=self.notify,
        )
        
        set_context(marker_group=self.group_key)
        logger.info(f"Opened marker editor session {self.session} ({self.title}) group={self.group_key}")
        return self.session
    
    def set_damage_type(self, damage_type: DamageType) -> None:
        if self.is_open:
            self.damage_type = DamageType(damage_type)
    
    def set_severity(self, severity: DamageSeverity) -> None:
        if self.is_open:
            self.severity = DamageSeverity(severity)
    
    def set_description(self, text: str) -> None:
        if self.is_open:
            self.description = text
    
    async def add_photos(self, files: Sequence[ImageFile]) -> PhotoBatchResult:
        """Forward a file selection to the session's photo manager."""
        if not self.is_open or self.photos is None:
            return PhotoBatchResult(dropped=len(files))
        session = self.session
        result = await self.photos.add_files(files)
        if session == self.session:
            self._uploaded_paths.extend(photo.storage_path for photo in result.added)
        return result
    
    async def remove_photo(self, index: int) -> bool:
        if not self.is_open or self.photos is None:
            return False
        return await self.photos.remove(index)
    
    def save(self) -> Optional[MarkerAttributes]:
        """
        Close the session and return the edited descriptive fields.
        
        Returns:
            MarkerAttributes, or None when the editor is not open
        """
        if not self.is_open:
            return None
        
        attributes = MarkerAttributes(
            damage_type=self.damage_type,
            severity=self.severity,
            description=self.description,
            photo_urls=tuple(self.photos.urls()) if self.photos else (),
        )
        logger.info(f"Saved marker editor session {self.session}: {len(attributes.photo_urls)} photos")
        self._close()
        return attributes
    
    def cancel(self) -> None:
        """Close the session, discarding all in-progress edits."""
        if not self.is_open:
            return
        
        # TODO: delete photos uploaded during a cancelled session once storage
        # supports a retention policy for unreferenced objects
        if self._uploaded_paths:
            logger.warning(
                f"Cancelled marker editor session {self.session} leaves "
                f"{len(self._uploaded_paths)} uploaded photos in storage: {self._uploaded_paths}"
            )
        else:
            logger.info(f"Cancelled marker editor session {self.session}")
        self._close()
    
    def _close(self) -> None:
        self.is_open = False
        self.photos = None
        self._uploaded_paths = []
