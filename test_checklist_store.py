"""Tests for the inventory checklist store."""

from vehicle_intake.stores.checklist import ChecklistStore
from vehicle_intake.utils.config import DEFAULT_CHECKLIST_LABELS


def make_store():
    emitted = []
    store = ChecklistStore.from_template(DEFAULT_CHECKLIST_LABELS, on_change=emitted.append)
    return store, emitted


def test_template_builds_unchecked_items_with_unique_ids():
    store, _ = make_store()
    items = store.items
    
    assert [item.label for item in items] == DEFAULT_CHECKLIST_LABELS
    assert len({item.id for item in items}) == 12
    assert not any(item.checked for item in items)
    assert store.summary() == "0 / 12 presentes"


def test_toggle_checks_item():
    store, emitted = make_store()
    item_id = store.items[0].id
    
    toggled = store.toggle(item_id)
    
    assert toggled.checked is True
    assert store.checked_count == 1
    assert store.summary() == "1 / 12 presente"
    assert emitted[-1][0].checked is True


def test_uncheck_clears_notes_in_one_emission():
    store, emitted = make_store()
    item_id = store.items[2].id
    store.toggle(item_id)
    store.set_notes(item_id, "abc")
    emitted.clear()
    
    store.toggle(item_id)
    
    assert len(emitted) == 1
    item = emitted[0][2]
    assert item.checked is False
    assert item.notes == ""


def test_set_notes_on_unchecked_item_is_allowed():
    store, _ = make_store()
    item_id = store.items[1].id
    
    updated = store.set_notes(item_id, "bajo el asiento")
    
    assert updated.notes == "bajo el asiento"
    assert updated.checked is False


def test_unknown_id_is_a_no_op():
    store, emitted = make_store()
    
    assert store.toggle("missing") is None
    assert store.set_notes("missing", "x") is None
    assert emitted == []


def test_other_items_are_untouched():
    store, _ = make_store()
    before = store.items
    
    store.toggle(before[5].id)
    
    after = store.items
    assert after[:5] == before[:5]
    assert after[6:] == before[6:]
