from cuekit.models import Cue
from cuekit.subtitles.state import ExternalSubtitleState

TWO_CUES = """1
00:00:01,000 --> 00:00:02,000
First

2
00:00:03,000 --> 00:00:04,000
Second
"""


def test_update_time_tracks_active_cue():
    state = ExternalSubtitleState()
    state.load(TWO_CUES)

    assert state.update_time(0.5) is False
    assert state.active_cue is None

    assert state.update_time(1.0) is True
    assert state.active_cue.text == "First"

    assert state.update_time(1.5) is False
    assert state.active_cue.text == "First"

    assert state.update_time(2.0) is True
    assert state.active_cue is None

    state.update_time(3.5)
    assert state.active_cue.text == "Second"

    state.update_time(4.0)
    assert state.active_cue is None

    state.update_time(100.0)
    assert state.active_cue is None


def test_on_change_only_fires_on_changes():
    changes = []
    state = ExternalSubtitleState(on_change=changes.append)
    state.load(TWO_CUES)

    for seconds in (0.0, 1.1, 1.2, 1.3, 2.5, 3.1, 3.2):
        state.update_time(seconds)

    assert [cue.text if cue else None for cue in changes] == ["First", None, "Second"]


def test_find_active_cue_matches_linear_scan():
    cues = [Cue(start_time=float(i * 3), end_time=float(i * 3 + 2), text=str(i)) for i in range(20)]
    state = ExternalSubtitleState()
    state.load_cues(cues)

    for tenth in range(0, 650):
        seconds = tenth / 10
        expected = [cue for cue in cues if cue.start_time <= seconds < cue.end_time]
        assert state.find_active_cue(seconds) == (expected[0] if expected else None)


def test_load_resets_active_cue():
    state = ExternalSubtitleState()
    state.load(TWO_CUES)
    state.update_time(1.5)
    assert state.active_cue is not None

    state.load(TWO_CUES)
    assert state.active_cue is None
    assert state.is_active


def test_clear_and_empty_state():
    changes = []
    state = ExternalSubtitleState(on_change=changes.append)
    state.load(TWO_CUES)
    state.update_time(1.5)

    state.clear()
    assert state.cues == []
    assert state.active_cue is None
    assert not state.is_active

    assert state.update_time(1.5) is False
    assert [cue.text for cue in changes] == ["First"]
