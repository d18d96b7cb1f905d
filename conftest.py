"""Shared fixtures: fake photo collaborators, sample images and a wired orchestrator."""

import io
from typing import Dict, List, Optional, Set

import pytest
from PIL import Image, ImageDraw

from vehicle_intake.models.inspection import VehicleBodyType, VehicleInspection
from vehicle_intake.models.photo import ImageFile, UploadResult
from vehicle_intake.orchestration.orchestrator import InspectionOrchestrator
from vehicle_intake.photos.storage import PhotoStorage
from vehicle_intake.utils.config import Config


class FakePhotoStorage(PhotoStorage):
    """In-memory storage that records calls and fails on request."""
    
    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.uploads: List[str] = []
        self.deletes: List[str] = []
        self.fail_uploads: Set[str] = set()
        self.raise_on_upload: Set[str] = set()
        self.fail_deletes = False
        self._counter = 0
    
    async def upload(self, file: ImageFile, group_key: str) -> UploadResult:
        self.uploads.append(file.filename)
        if file.filename in self.raise_on_upload:
            raise ConnectionError("connection reset")
        if file.filename in self.fail_uploads:
            return UploadResult.failure("Bucket not found")
        self._counter += 1
        path = f"markers/{group_key}/{self._counter}-{file.filename}"
        self.objects[path] = file.data
        return UploadResult(url=f"https://cdn.test/{path}", path=path)
    
    async def delete(self, path: str) -> bool:
        self.deletes.append(path)
        if self.fail_deletes:
            raise ConnectionError("storage unavailable")
        return self.objects.pop(path, None) is not None


class FakeCompressor:
    """Pass-through compressor that raises for selected filenames."""
    
    def __init__(self):
        self.calls: List[str] = []
        self.fail: Set[str] = set()
    
    async def compress(self, file: ImageFile) -> ImageFile:
        self.calls.append(file.filename)
        if file.filename in self.fail:
            raise OSError("cannot identify image file")
        return file


class Recorder:
    """Collects every value passed to a parent-form callback."""
    
    def __init__(self):
        self.calls = []
    
    def __call__(self, value):
        self.calls.append(value)
    
    @property
    def last(self):
        return self.calls[-1] if self.calls else None


def make_image_bytes(size=(64, 48), color=(200, 40, 40), fmt="JPEG", noise=False) -> bytes:
    """Build an in-memory image, optionally noisy so it compresses poorly."""
    img = Image.new("RGB", size, color=color)
    if noise:
        img = Image.effect_noise(size, 120).convert("RGB")
    draw = ImageDraw.Draw(img)
    draw.rectangle([2, 2, size[0] // 2, size[1] // 2], outline=(20, 20, 20))
    buffer = io.BytesIO()
    img.save(buffer, fmt, quality=95)
    return buffer.getvalue()


def make_image_file(name: str = "photo.jpg", content_type: str = "image/jpeg", data: Optional[bytes] = None) -> ImageFile:
    return ImageFile(filename=name, content_type=content_type, data=data if data is not None else make_image_bytes())


@pytest.fixture()
def storage() -> FakePhotoStorage:
    return FakePhotoStorage()


@pytest.fixture()
def compressor() -> FakeCompressor:
    return FakeCompressor()


@pytest.fixture()
def config() -> Config:
    return Config.default()


@pytest.fixture()
def callbacks() -> Dict[str, Recorder]:
    return {
        "on_change": Recorder(),
        "on_fuel_level_change": Recorder(),
        "on_entry_mileage_change": Recorder(),
        "on_body_type_change": Recorder(),
        "notify": Recorder(),
    }


@pytest.fixture()
def make_orchestrator(storage, compressor, config, callbacks):
    """Factory building an orchestrator wired to recorders and fakes."""
    def factory(
        value: Optional[VehicleInspection] = None,
        body_type: Optional[VehicleBodyType] = None,
        read_only: bool = False,
        fuel_level: float = 50,
        entry_mileage: str = ""
    ) -> InspectionOrchestrator:
        return InspectionOrchestrator(
            value=value,
            on_change=callbacks["on_change"],
            fuel_level=fuel_level,
            on_fuel_level_change=callbacks["on_fuel_level_change"],
            entry_mileage=entry_mileage,
            on_entry_mileage_change=callbacks["on_entry_mileage_change"],
            body_type=body_type,
            on_body_type_change=callbacks["on_body_type_change"],
            storage=storage,
            compressor=compressor,
            read_only=read_only,
            config=config,
            notify=callbacks["notify"],
        )
    return factory
