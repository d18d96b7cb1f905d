"""Tests for the per-marker photo manager."""

import asyncio

import pytest

from conftest import make_image_file
from vehicle_intake.models.photo import PhotoItem
from vehicle_intake.photos.manager import PhotoManager
from vehicle_intake.utils.errors import ErrorType


def make_manager(storage, compressor, photos=(), notify=None, on_change=None):
    return PhotoManager(
        storage=storage,
        compressor=compressor,
        group_key="marker-1",
        photos=photos,
        max_photos=3,
        notify=notify,
        on_change=on_change,
    )


@pytest.mark.asyncio
async def test_add_files_uploads_in_selection_order(storage, compressor):
    changes = []
    manager = make_manager(storage, compressor, on_change=changes.append)
    
    result = await manager.add_files([make_image_file("a.jpg"), make_image_file("b.jpg")])
    
    assert [p.storage_path.rsplit("-", 1)[-1] for p in result.added] == ["a.jpg", "b.jpg"]
    assert manager.urls() == [p.url for p in result.added]
    assert result.notices == []
    assert manager.uploading is False
    assert len(changes) == 1
    assert all(p.storage_path.startswith("markers/marker-1/") for p in manager.photos)


@pytest.mark.asyncio
async def test_full_list_processes_nothing_and_raises_capacity_notice(storage, compressor):
    notices = []
    existing = [PhotoItem(url=f"https://cdn.test/{i}.jpg") for i in range(3)]
    manager = make_manager(storage, compressor, photos=existing, notify=notices.append)
    
    result = await manager.add_files([make_image_file("d.jpg"), make_image_file("e.jpg")])
    
    assert result.added == []
    assert result.dropped == 2
    assert compressor.calls == []
    assert storage.uploads == []
    assert len(manager.photos) == 3
    assert [n.message for n in notices] == ["Máximo 3 fotos por daño"]
    assert notices[0].context.error_type == ErrorType.PHOTO_CAPACITY_REACHED


@pytest.mark.asyncio
async def test_selection_is_truncated_to_remaining_slots(storage, compressor):
    existing = [PhotoItem(url="https://cdn.test/0.jpg")]
    manager = make_manager(storage, compressor, photos=existing)
    files = [make_image_file(f"{name}.jpg") for name in "abcde"]
    assert manager.can_add_more

    result = await manager.add_files(files)

    assert not manager.can_add_more
    assert manager.remaining_slots == 0
    assert compressor.calls == ["a.jpg", "b.jpg"]
    assert storage.uploads == ["a.jpg", "b.jpg"]
    assert len(result.added) == 2
    assert result.dropped == 3
    assert len(manager.photos) == 3
    assert result.notices[0].message == "Máximo 3 fotos por daño"


@pytest.mark.asyncio
async def test_compression_failure_skips_file_and_continues(storage, compressor):
    compressor.fail.add("b.jpg")
    manager = make_manager(storage, compressor)
    
    result = await manager.add_files([make_image_file(n) for n in ("a.jpg", "b.jpg", "c.jpg")])
    
    assert storage.uploads == ["a.jpg", "c.jpg"]
    assert len(result.added) == 2
    assert [n.message for n in result.notices] == ["Error al procesar la imagen"]
    assert result.failed == 1


@pytest.mark.asyncio
async def test_upload_error_result_becomes_notice(storage, compressor):
    storage.fail_uploads.add("a.jpg")
    manager = make_manager(storage, compressor)
    
    result = await manager.add_files([make_image_file("a.jpg"), make_image_file("b.jpg")])
    
    assert len(result.added) == 1
    assert result.notices[0].message == "Error al subir foto: Bucket not found"
    assert result.notices[0].context.error_type == ErrorType.PHOTO_UPLOAD_FAILED


@pytest.mark.asyncio
async def test_upload_exception_becomes_notice(storage, compressor):
    storage.raise_on_upload.add("a.jpg")
    manager = make_manager(storage, compressor)
    
    result = await manager.add_files([make_image_file("a.jpg")])
    
    assert result.added == []
    assert result.notices[0].message == "Error al subir foto: connection reset"
    assert manager.uploading is False


@pytest.mark.asyncio
async def test_unsupported_type_is_rejected_per_file(storage, compressor):
    manager = make_manager(storage, compressor)
    
    result = await manager.add_files([
        make_image_file("scan.pdf", content_type="application/pdf", data=b"%PDF-1.4"),
        make_image_file("b.jpg"),
    ])
    
    assert compressor.calls == ["b.jpg"]
    assert len(result.added) == 1
    assert result.notices[0].context.error_type == ErrorType.PHOTO_UNSUPPORTED_TYPE


@pytest.mark.asyncio
async def test_appends_follow_selection_order_not_completion_order(storage):
    class SlowFirstCompressor:
        async def compress(self, file):
            await asyncio.sleep(0.02 if file.filename == "a.jpg" else 0)
            return file
    
    manager = make_manager(storage, SlowFirstCompressor())
    
    await manager.add_files([make_image_file("a.jpg"), make_image_file("b.jpg")])
    
    assert [p.storage_path.rsplit("-", 1)[-1] for p in manager.photos] == ["a.jpg", "b.jpg"]


@pytest.mark.asyncio
async def test_remove_session_photo_deletes_from_storage(storage, compressor):
    manager = make_manager(storage, compressor)
    await manager.add_files([make_image_file("a.jpg")])
    path = manager.photos[0].storage_path
    
    assert await manager.remove(0) is True
    
    assert storage.deletes == [path]
    assert manager.photos == []


@pytest.mark.asyncio
async def test_remove_seeded_photo_skips_storage(storage, compressor):
    manager = make_manager(storage, compressor, photos=[PhotoItem(url="https://cdn.test/old.jpg")])
    
    assert await manager.remove(0) is True
    
    assert storage.deletes == []
    assert manager.photos == []


@pytest.mark.asyncio
async def test_remove_succeeds_locally_when_delete_fails(storage, compressor):
    manager = make_manager(storage, compressor)
    await manager.add_files([make_image_file("a.jpg"), make_image_file("b.jpg")])
    storage.fail_deletes = True
    
    assert await manager.remove(0) is True
    
    assert len(manager.photos) == 1
    assert manager.photos[0].storage_path.endswith("b.jpg")


@pytest.mark.asyncio
async def test_remove_out_of_range_is_a_no_op(storage, compressor):
    manager = make_manager(storage, compressor)
    
    assert await manager.remove(0) is False
    assert await manager.remove(-1) is False


@pytest.mark.asyncio
async def test_empty_selection_does_nothing(storage, compressor):
    manager = make_manager(storage, compressor)
    
    result = await manager.add_files([])
    
    assert result.added == [] and result.notices == [] and result.dropped == 0
