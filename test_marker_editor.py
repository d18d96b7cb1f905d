"""Tests for the marker editor session lifecycle."""

import logging

import pytest

from conftest import make_image_file
from vehicle_intake.components.marker_editor import MarkerEditor
from vehicle_intake.models.inspection import DamageSeverity, DamageType, MarkerAttributes


@pytest.fixture()
def editor(storage, compressor):
    return MarkerEditor(storage=storage, compressor=compressor)


def test_open_for_create_uses_defaults(editor):
    session = editor.open()
    
    assert session == 1
    assert editor.is_open and not editor.is_editing
    assert editor.title == "Registrar daño"
    assert editor.damage_type == DamageType.SCRATCH
    assert editor.severity == DamageSeverity.LIGHT
    assert editor.description == ""
    assert editor.photos.photos == []
    assert editor.group_key


def test_open_for_edit_seeds_fields_and_photos(editor):
    initial = MarkerAttributes(
        damage_type=DamageType.DENT,
        severity=DamageSeverity.MODERATE,
        description="Puerta trasera",
        photo_urls=("https://cdn.test/1.jpg",),
    )
    
    editor.open(initial, group_key="marker-7")
    
    assert editor.title == "Editar daño"
    assert editor.group_key == "marker-7"
    assert editor.damage_type == DamageType.DENT
    assert editor.description == "Puerta trasera"
    assert [(p.url, p.storage_path) for p in editor.photos.photos] == [("https://cdn.test/1.jpg", "")]


def test_reopen_resets_previous_session(editor):
    initial = MarkerAttributes(description="original")
    editor.open(initial, group_key="m1")
    editor.set_description("edited but not saved")
    editor.set_severity(DamageSeverity.SEVERE)
    editor.cancel()
    
    second = editor.open(initial, group_key="m1")
    
    assert second == 2
    assert editor.description == "original"
    assert editor.severity == DamageSeverity.LIGHT


def test_create_sessions_get_distinct_group_keys(editor):
    editor.open()
    first = editor.group_key
    editor.cancel()
    editor.open()
    
    assert editor.group_key != first


def test_save_returns_attributes_and_closes(editor):
    editor.open()
    editor.set_damage_type(DamageType.RUST)
    editor.set_severity(DamageSeverity.MODERATE)
    editor.set_description("Bajo la puerta")
    
    attributes = editor.save()
    
    assert attributes == MarkerAttributes(
        damage_type=DamageType.RUST,
        severity=DamageSeverity.MODERATE,
        description="Bajo la puerta",
        photo_urls=(),
    )
    assert not editor.is_open
    assert editor.save() is None


def test_setters_are_ignored_when_closed(editor):
    editor.set_description("ignored")
    assert editor.description == ""


@pytest.mark.asyncio
async def test_uploaded_photos_are_saved_under_one_group_key(editor, storage):
    editor.open(MarkerAttributes(), group_key="marker-3")
    await editor.add_photos([make_image_file("a.jpg")])
    await editor.add_photos([make_image_file("b.jpg")])
    
    attributes = editor.save()
    
    assert len(attributes.photo_urls) == 2
    assert all(path.startswith("markers/marker-3/") for path in storage.objects)


@pytest.mark.asyncio
async def test_remove_photo_updates_saved_urls(editor):
    editor.open()
    await editor.add_photos([make_image_file("a.jpg"), make_image_file("b.jpg")])
    
    assert await editor.remove_photo(0) is True
    
    assert len(editor.save().photo_urls) == 1


@pytest.mark.asyncio
async def test_cancel_keeps_uploaded_photos_in_storage(editor, storage, caplog):
    editor.open()
    await editor.add_photos([make_image_file("a.jpg")])
    
    with caplog.at_level(logging.WARNING, logger="vehicle_intake.components.marker_editor"):
        editor.cancel()
    
    assert not editor.is_open
    assert storage.deletes == []
    assert len(storage.objects) == 1
    assert "leaves 1 uploaded photos" in caplog.text


@pytest.mark.asyncio
async def test_add_photos_when_closed_is_a_no_op(editor, storage):
    result = await editor.add_photos([make_image_file("a.jpg")])
    
    assert result.added == []
    assert storage.uploads == []


def test_vocabulary_options(editor):
    assert len(editor.damage_type_options()) == 8
    severities = editor.severity_options()
    assert severities[0] == (DamageSeverity.LIGHT, "Leve", "#FCD34D")
