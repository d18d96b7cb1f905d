"""Photo data models shared by the photo manager and storage backends."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional


@dataclass(frozen=True)
class ImageFile:
    """
    An image selected by the user, held in memory.
    
    Attributes:
        filename: Original filename
        content_type: MIME type declared for the file
        data: Raw file bytes
    """
    filename: str
    content_type: str
    data: bytes
    
    @property
    def size(self) -> int:
        return len(self.data)
    
    @property
    def extension(self) -> str:
        """Lower-case extension without the dot, ``jpg`` when absent."""
        suffix = PurePosixPath(self.filename).suffix.lower().lstrip(".")
        return suffix or "jpg"


@dataclass(frozen=True)
class PhotoItem:
    """
    A photo attached to the marker being edited.
    
    ``storage_path`` is only known for photos uploaded during the current
    editing session; photos seeded from a saved marker carry an empty path
    and are never deleted from storage by the editor.
    """
    url: str
    storage_path: str = ""


@dataclass(frozen=True)
class UploadResult:
    """
    Outcome of a storage upload: either ``url`` and ``path`` or ``error``.
    """
    url: str = ""
    path: str = ""
    error: Optional[str] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None
    
    @classmethod
    def failure(cls, error: str) -> "UploadResult":
        return cls(url="", path="", error=error)
