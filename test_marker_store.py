"""Tests for the damage marker store."""

import pytest

from vehicle_intake.models.inspection import (
    DamageSeverity,
    DamageType,
    DiagramView,
    MarkerAttributes,
    VehicleBodyType,
)
from vehicle_intake.stores.markers import DamageMarkerStore


def make_store(markers=(), body_type=VehicleBodyType.SEDAN):
    emitted = []
    store = DamageMarkerStore(markers, on_change=emitted.append, body_type=body_type)
    return store, emitted


def test_add_appends_marker_with_fresh_id():
    store, emitted = make_store()
    
    first = store.add(DiagramView.FRONT, 10, 20, MarkerAttributes())
    second = store.add(DiagramView.FRONT, 30, 40, MarkerAttributes())
    
    assert first.id != second.id
    assert [m.id for m in store.markers] == [first.id, second.id]
    assert first.damage_type == DamageType.SCRATCH
    assert first.severity == DamageSeverity.LIGHT
    assert len(emitted) == 2
    assert emitted[-1] == store.markers


def test_add_clamps_coordinates():
    store, _ = make_store()
    marker = store.add(DiagramView.TOP, -12, 140, MarkerAttributes())
    assert (marker.x, marker.y) == (0.0, 100.0)


def test_add_without_body_type_is_a_no_op():
    store, emitted = make_store(body_type=None)
    
    assert store.add(DiagramView.TOP, 50, 50, MarkerAttributes()) is None
    assert store.markers == []
    assert emitted == []


@pytest.mark.parametrize("view", list(DiagramView))
@pytest.mark.parametrize("x,y", [(0, 0), (50, 50), (100, 100), (12.5, 87.25)])
def test_add_then_remove_restores_previous_collection(view, x, y):
    store, _ = make_store()
    store.add(DiagramView.LEFT, 5, 5, MarkerAttributes())
    before = store.markers
    
    marker = store.add(view, x, y, MarkerAttributes(damage_type=DamageType.DENT))
    assert store.remove(marker.id) is True
    
    assert store.markers == before


def test_update_keeps_identity():
    store, emitted = make_store()
    marker = store.add(DiagramView.RIGHT, 33, 66, MarkerAttributes())
    
    updated = store.update(marker.id, MarkerAttributes(
        damage_type=DamageType.CRACK,
        severity=DamageSeverity.SEVERE,
        description="Parabrisas",
        photo_urls=("https://cdn.test/a.jpg",),
    ))
    
    assert (updated.id, updated.view, updated.x, updated.y) == (marker.id, marker.view, marker.x, marker.y)
    assert updated.severity == DamageSeverity.SEVERE
    assert updated.description == "Parabrisas"
    assert updated.photo_urls == ("https://cdn.test/a.jpg",)
    assert store.get(marker.id) == updated
    assert len(emitted) == 2


def test_update_and_remove_unknown_id_are_no_ops():
    store, emitted = make_store()
    store.add(DiagramView.TOP, 1, 1, MarkerAttributes())
    emitted.clear()
    
    assert store.update("missing", MarkerAttributes()) is None
    assert store.remove("missing") is False
    assert emitted == []


def test_by_view_preserves_order_and_numbering():
    store, _ = make_store()
    a = store.add(DiagramView.TOP, 1, 1, MarkerAttributes())
    store.add(DiagramView.FRONT, 2, 2, MarkerAttributes())
    c = store.add(DiagramView.TOP, 3, 3, MarkerAttributes())
    
    assert [m.id for m in store.by_view(DiagramView.TOP)] == [a.id, c.id]
    assert [(n, m.id) for n, m in store.numbered(DiagramView.TOP)] == [(1, a.id), (2, c.id)]
    assert store.views_with_markers() == [DiagramView.TOP, DiagramView.FRONT]


def test_views_with_markers_follow_tab_order():
    store, _ = make_store()
    store.add(DiagramView.RIGHT, 1, 1, MarkerAttributes())
    store.add(DiagramView.FRONT, 2, 2, MarkerAttributes())
    
    assert store.views_with_markers() == [DiagramView.FRONT, DiagramView.RIGHT]


def test_grouped_keeps_requested_order_and_empty_views():
    store, _ = make_store()
    top = store.add(DiagramView.TOP, 1, 1, MarkerAttributes())
    left = store.add(DiagramView.LEFT, 2, 2, MarkerAttributes())
    
    grouped = store.grouped([DiagramView.LEFT, DiagramView.FRONT, DiagramView.TOP])
    
    assert list(grouped) == [DiagramView.LEFT, DiagramView.FRONT, DiagramView.TOP]
    assert [m.id for m in grouped[DiagramView.LEFT]] == [left.id]
    assert grouped[DiagramView.FRONT] == []
    assert [m.id for m in grouped[DiagramView.TOP]] == [top.id]


def test_emitted_list_is_a_copy():
    store, emitted = make_store()
    store.add(DiagramView.TOP, 1, 1, MarkerAttributes())
    
    emitted[-1].clear()
    
    assert len(store) == 1
