import pytest

from roomsdemo.errors import InvalidArgument, SessionNotStarted
from roomsdemo.events import EventBus, EventType
from roomsdemo.rng import RandomSource
from roomsdemo.sequencer import OFFSET_KEY, ThemeSequencer, ThemeTriple
from roomsdemo.storage import JsonPrefsStore, MemoryPrefsStore
from roomsdemo.themes import RoomTheme, theme_for_room


def started(offset=2, store=None, bus=None) -> ThemeSequencer:
    seq = ThemeSequencer(store or MemoryPrefsStore(), bus=bus)
    seq.initialize_session(offset=offset)
    return seq


def test_initial_session_at_room_one():
    seq = started()
    assert seq.room_number == 1
    assert seq.themes == ThemeTriple(RoomTheme.FOREST, RoomTheme.FOREST, RoomTheme.COUNTRYSIDE)


def test_next_shifts_slots():
    seq = started()
    triple = seq.next()
    assert seq.room_number == 2
    assert triple == ThemeTriple(RoomTheme.FOREST, RoomTheme.COUNTRYSIDE, RoomTheme.CAVE)


def test_previous_is_noop_at_room_one():
    seq = started()
    before = seq.themes
    for _ in range(3):
        assert seq.previous() == before
    assert seq.room_number == 1


def test_previous_noop_publishes_nothing():
    bus = EventBus()
    seq = started(bus=bus)
    seen = []
    bus.subscribe(EventType.ROOM_CHANGED, lambda state: seen.append(state))
    seq.previous()
    assert seen == []


@pytest.mark.parametrize("start", [1, 2, 3, 10, 25])
@pytest.mark.parametrize("offset", [1, 2, 3, 6])
def test_next_then_previous_round_trip(start, offset):
    seq = started(offset=offset)
    seq.jump_to(start)
    before = (seq.room_number, seq.themes)
    seq.next()
    seq.previous()
    assert (seq.room_number, seq.themes) == before


def test_previous_slot_tracks_room_before_cursor():
    seq = started(offset=3)
    for _ in range(5):
        seq.next()
    seq.previous()
    assert seq.room_number == 5
    assert seq.themes.previous is theme_for_room(4, 3)
    assert seq.themes.next is theme_for_room(6, 3)


def test_jump_recomputes_all_slots():
    seq = started()
    seq.next()
    triple = seq.jump_to(25)
    assert seq.room_number == 25
    assert triple == ThemeTriple(RoomTheme.CAVE, RoomTheme.BACKWATERS, RoomTheme.DESERT)


def test_jump_to_room_one_mirrors_previous():
    seq = started()
    seq.jump_to(9)
    triple = seq.jump_to(1)
    assert triple.previous is triple.current is RoomTheme.FOREST


@pytest.mark.parametrize("bad", [0, -3, 2.0, "5", True])
def test_jump_rejects_invalid_rooms(bad):
    seq = started()
    seq.jump_to(4)
    with pytest.raises(InvalidArgument):
        seq.jump_to(bad)
    assert seq.room_number == 4


def test_navigation_before_session_fails():
    seq = ThemeSequencer(MemoryPrefsStore())
    with pytest.raises(SessionNotStarted):
        seq.next()
    with pytest.raises(SessionNotStarted):
        _ = seq.state


def test_drawn_offset_never_repeats_previous_session():
    for seed in range(40):
        store = MemoryPrefsStore({OFFSET_KEY: 3})
        seq = ThemeSequencer(store, rng=RandomSource(seed))
        seq.initialize_session()
        assert seq.offset != 3
        assert 1 <= seq.offset <= 6
        assert store.get(OFFSET_KEY) == seq.offset
        assert store.flush_count == 1


def test_reinitializing_rerolls_against_persisted_value():
    store = MemoryPrefsStore()
    seq = ThemeSequencer(store, rng=RandomSource(7))
    last = None
    for _ in range(20):
        seq.initialize_session()
        assert seq.offset != last
        last = seq.offset


def test_first_draw_with_empty_store():
    store = MemoryPrefsStore()
    seq = ThemeSequencer(store, rng=RandomSource(1))
    seq.initialize_session()
    assert store.get(OFFSET_KEY) == seq.offset


def test_forced_offset_validated():
    seq = ThemeSequencer(MemoryPrefsStore())
    with pytest.raises(InvalidArgument):
        seq.initialize_session(offset=7)
    with pytest.raises(InvalidArgument):
        seq.initialize_session(offset=0)


def test_state_changes_are_published():
    bus = EventBus()
    states = []
    bus.subscribe(EventType.ROOM_CHANGED, lambda state: states.append(state))
    seq = started(bus=bus)
    seq.next()
    seq.jump_to(25)
    assert [s.room_number for s in states] == [1, 2, 25]
    assert states[-1].current_theme is RoomTheme.BACKWATERS
    assert states[-1].offset == 2


def test_preview_does_not_move_cursor():
    seq = started()
    rooms = seq.preview(1, 3)
    assert rooms == [(1, RoomTheme.FOREST), (2, RoomTheme.COUNTRYSIDE), (3, RoomTheme.CAVE)]
    assert seq.room_number == 1
    with pytest.raises(InvalidArgument):
        seq.preview(0, 3)


def test_offset_survives_restart_and_is_rerolled(tmp_path):
    first = ThemeSequencer(JsonPrefsStore(config_dir=tmp_path), rng=RandomSource(11))
    first.initialize_session()
    saved = first.offset

    reopened = JsonPrefsStore(config_dir=tmp_path)
    assert reopened.get(OFFSET_KEY) == saved

    second = ThemeSequencer(reopened, rng=RandomSource(11))
    second.initialize_session()
    assert second.offset != saved
    assert JsonPrefsStore(config_dir=tmp_path).get(OFFSET_KEY) == second.offset
