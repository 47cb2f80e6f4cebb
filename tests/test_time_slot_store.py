import pytest

from storefront.errors import CorruptStateError, NotFoundError, ValidationError
from storefront.schemas.time_slots import TimeSlot, TimeSlotUpdate
from storefront.services.slots import default_config
from storefront.services.slots.store import DOCUMENT

from conftest import make_config


def test_first_read_creates_and_persists_defaults(slot_store, store):
    config = slot_store.get_config()

    assert config.available_days == ["Monday", "Tuesday", "Wednesday",
                                     "Thursday", "Friday", "Saturday"]
    assert [s.start_time for s in config.time_slots] == [
        "09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00"
    ]
    assert all(s.max_orders == 5 for s in config.time_slots)
    assert config.lead_time == 1
    assert config.max_advance_booking_days == 14

    saved = store.load(DOCUMENT)
    assert saved["availableDays"][0] == "Monday"
    assert saved["timeSlots"][0]["startTime"] == "09:00"
    # Second read returns the persisted ids, not new defaults
    assert [s.id for s in slot_store.get_config().time_slots] == [
        s.id for s in config.time_slots
    ]


def test_default_config_is_valid():
    config = default_config()
    assert len(config.time_slots) == 8
    assert config.time_slots[-1].end_time == "17:00"


def test_corrupt_document_is_not_replaced_by_defaults(slot_store, store):
    store.put_raw(DOCUMENT, "{not json")
    with pytest.raises(CorruptStateError):
        slot_store.get_config()
    assert store._documents[DOCUMENT] == "{not json"


def test_schema_invalid_document_is_corrupt(slot_store, store):
    store.save(DOCUMENT, {"availableDays": ["Funday"], "timeSlots": []})
    with pytest.raises(CorruptStateError):
        slot_store.get_config()


def test_replace_config_sorts_slots(slot_store):
    config = make_config(time_slots=[
        TimeSlot(id="late", start_time="15:00", end_time="16:00", max_orders=2),
        TimeSlot(id="early", start_time="08:30", end_time="09:00", max_orders=2),
    ])
    slot_store.replace_config(config)
    assert [s.id for s in slot_store.get_config().time_slots] == ["early", "late"]


def test_replace_config_requires_a_config(slot_store):
    with pytest.raises(ValidationError):
        slot_store.replace_config(None)


def test_add_slot_inserts_in_start_time_order(slot_store):
    slot_store.replace_config(make_config())
    config = slot_store.add_slot(
        TimeSlot(id="early", start_time="08:00", end_time="09:00", max_orders=3)
    )
    assert [s.start_time for s in config.time_slots] == ["08:00", "09:00", "10:00"]
    assert slot_store.get_config() == config


def test_add_slot_rejects_duplicate_start_time(slot_store):
    slot_store.replace_config(make_config())
    with pytest.raises(ValidationError, match="Duplicate"):
        slot_store.add_slot(
            TimeSlot(id="dup", start_time="09:00", end_time="09:30", max_orders=1)
        )
    assert len(slot_store.get_config().time_slots) == 2


def test_update_slot_merges_partial_changes(slot_store):
    slot_store.replace_config(make_config())
    config = slot_store.update_slot("slot-9", TimeSlotUpdate(max_orders=8))

    slot = config.time_slots[0]
    assert slot.id == "slot-9"
    assert slot.start_time == "09:00"
    assert slot.end_time == "10:00"
    assert slot.max_orders == 8


def test_update_slot_moving_start_time_resorts(slot_store):
    slot_store.replace_config(make_config())
    config = slot_store.update_slot(
        "slot-9", TimeSlotUpdate(start_time="11:00", end_time="12:00")
    )
    assert [s.id for s in config.time_slots] == ["slot-10", "slot-9"]


def test_update_slot_rejects_inverted_range(slot_store):
    slot_store.replace_config(make_config())
    with pytest.raises(ValidationError):
        slot_store.update_slot("slot-9", TimeSlotUpdate(end_time="08:00"))


def test_update_unknown_slot_is_not_found(slot_store):
    slot_store.replace_config(make_config())
    with pytest.raises(NotFoundError):
        slot_store.update_slot("missing", TimeSlotUpdate(max_orders=1))


def test_delete_slot(slot_store):
    slot_store.replace_config(make_config())
    config = slot_store.delete_slot("slot-9")
    assert [s.id for s in config.time_slots] == ["slot-10"]


def test_delete_unknown_slot_leaves_config_unchanged(slot_store):
    slot_store.replace_config(make_config())
    before = slot_store.get_config()
    with pytest.raises(NotFoundError):
        slot_store.delete_slot("missing")
    assert slot_store.get_config() == before


def test_slots_stay_sorted_after_any_sequence(slot_store):
    slot_store.replace_config(make_config(time_slots=[]))
    slot_store.add_slot(TimeSlot(id="c", start_time="16:00", end_time="17:00", max_orders=1))
    slot_store.add_slot(TimeSlot(id="a", start_time="07:15", end_time="08:00", max_orders=1))
    slot_store.add_slot(TimeSlot(id="b", start_time="12:00", end_time="12:30", max_orders=1))
    slot_store.update_slot("a", TimeSlotUpdate(start_time="13:00", end_time="13:30"))
    slot_store.delete_slot("b")
    slot_store.add_slot(TimeSlot(id="d", start_time="06:00", end_time="06:30", max_orders=1))

    starts = [s.start_minutes for s in slot_store.get_config().time_slots]
    assert starts == sorted(starts)
    assert [s.id for s in slot_store.get_config().time_slots] == ["d", "a", "c"]
