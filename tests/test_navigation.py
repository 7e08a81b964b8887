"""Tests for segment navigation state."""

import pytest

from dictation_coach.navigation import SegmentNavigator
from dictation_coach.playback import PlaybackController
from dictation_coach.segments import partition


class RecordingPlayer:
    """Playback controller that remembers requested ranges."""

    def __init__(self):
        self.requests: list[tuple[float, float]] = []

    def play_range(self, start: float, end: float) -> None:
        self.requests.append((start, end))


@pytest.fixture
def player() -> RecordingPlayer:
    return RecordingPlayer()


@pytest.fixture
def emitted() -> list:
    return []


@pytest.fixture
def navigator(player, emitted) -> SegmentNavigator:
    nav = SegmentNavigator(on_segment_change=emitted.append, playback=player)
    nav.regenerate(partition(40, 15))
    emitted.clear()
    return nav


class TestInitialState:
    """Tests for a navigator before any segments exist."""

    def test_no_active_segment(self):
        nav = SegmentNavigator()
        assert nav.current_index == 0
        assert nav.active_segment is None

    def test_navigation_is_noop_without_segments(self, player):
        nav = SegmentNavigator(playback=player)
        assert nav.next() is None
        assert nav.previous() is None
        assert nav.on_time_update(5) is None
        assert nav.play_current() is None
        assert player.requests == []

    def test_recording_player_satisfies_protocol(self, player):
        assert isinstance(player, PlaybackController)


class TestRegenerate:
    """Tests for regenerate transition."""

    def test_emits_first_segment(self, emitted):
        nav = SegmentNavigator(on_segment_change=emitted.append)
        first = nav.regenerate(partition(40, 15))
        assert first.id == 0
        assert emitted == [first]

    def test_resets_index(self, navigator):
        navigator.jump_to(2)
        navigator.regenerate(partition(60, 10))
        assert navigator.current_index == 0
        assert len(navigator.segments) == 6

    def test_empty_list_emits_nothing(self, emitted):
        nav = SegmentNavigator(on_segment_change=emitted.append)
        assert nav.regenerate([]) is None
        assert emitted == []
        assert nav.active_segment is None

    def test_does_not_request_playback(self, player):
        nav = SegmentNavigator(playback=player)
        nav.regenerate(partition(40, 15))
        assert player.requests == []


class TestOnTimeUpdate:
    """Tests for on_time_update transition."""

    def test_moves_to_segment_containing_time(self, navigator, emitted):
        segment = navigator.on_time_update(32)
        assert segment.id == 2
        assert navigator.current_index == 2
        assert emitted == [segment]

    def test_same_segment_emits_nothing(self, navigator, emitted):
        assert navigator.on_time_update(3) is None
        assert navigator.on_time_update(7) is None
        assert emitted == []

    def test_repeated_ticks_emit_once(self, navigator, emitted):
        for time in [16, 17, 18, 19]:
            navigator.on_time_update(time)
        assert [s.id for s in emitted] == [1]

    def test_end_of_media_keeps_state(self, navigator, emitted):
        navigator.on_time_update(35)
        emitted.clear()
        assert navigator.on_time_update(40) is None
        assert navigator.current_index == 2
        assert emitted == []

    def test_does_not_request_playback(self, navigator, player):
        navigator.on_time_update(20)
        assert player.requests == []


class TestExplicitNavigation:
    """Tests for previous, next, jump_to and play_current."""

    def test_next_advances_and_plays(self, navigator, emitted, player):
        segment = navigator.next()
        assert segment.id == 1
        assert emitted == [segment]
        assert player.requests == [(15.0, 30.0)]

    def test_next_on_last_is_noop(self, navigator, emitted, player):
        navigator.jump_to(2)
        emitted.clear()
        player.requests.clear()
        assert navigator.next() is None
        assert navigator.current_index == 2
        assert emitted == []
        assert player.requests == []

    def test_previous_on_first_is_noop(self, navigator, emitted, player):
        assert navigator.previous() is None
        assert navigator.current_index == 0
        assert emitted == []
        assert player.requests == []

    def test_previous_steps_back_and_plays(self, navigator, player):
        navigator.jump_to(2)
        segment = navigator.previous()
        assert segment.id == 1
        assert player.requests[-1] == (15.0, 30.0)

    def test_jump_to_plays_segment(self, navigator, emitted, player):
        segment = navigator.jump_to(2)
        assert segment.id == 2
        assert emitted == [segment]
        assert player.requests == [(30.0, 40.0)]

    @pytest.mark.parametrize("index", [-1, 3])
    def test_jump_out_of_range_raises(self, navigator, emitted, index):
        with pytest.raises(IndexError, match="out of range"):
            navigator.jump_to(index)
        assert navigator.current_index == 0
        assert emitted == []

    def test_play_current_keeps_index(self, navigator, emitted, player):
        navigator.play_current()
        assert navigator.current_index == 0
        assert emitted == []
        assert player.requests == [(0.0, 15.0)]

    def test_works_without_playback(self, emitted):
        nav = SegmentNavigator(on_segment_change=emitted.append)
        nav.regenerate(partition(40, 15))
        assert nav.next().id == 1
