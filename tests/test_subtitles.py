import pytest

from cuekit.models import Cue
from cuekit.subtitles.parser import (
    format_webvtt,
    parse_subtitle_file,
    parse_subtitles,
    strip_markup,
)

OUT_OF_ORDER_SRT = """2
00:00:05,000 --> 00:00:07,500
<b>Bold <i>both</b> text</i>

1
00:00:01,000 --> 00:00:03,000
First <i>line</i>
"""


def test_parse_srt_sorts_and_strips_markup():
    cues = parse_subtitles(OUT_OF_ORDER_SRT)
    assert cues == [
        Cue(start_time=1.0, end_time=3.0, text="First line"),
        Cue(start_time=5.0, end_time=7.5, text="Bold both text"),
    ]
    assert all(cue.start_time < cue.end_time for cue in cues)


def test_parse_webvtt_with_header_notes_and_settings():
    content = """WEBVTT - Episode 1
Kind: captions

NOTE translated by a fan

intro
00:00:01.000 --> 00:00:02.000 align:start position:10%
Hello

00:02.500 --> 00:04.000
Short
timecodes
"""
    cues = parse_subtitles(content)
    assert len(cues) == 2
    assert cues[0] == Cue(start_time=1.0, end_time=2.0, text="Hello")
    assert cues[1].start_time == pytest.approx(2.5)
    assert cues[1].end_time == pytest.approx(4.0)
    assert cues[1].text == "Short\ntimecodes"


def test_parse_handles_bom_and_crlf():
    content = "\ufeff1\r\n00:00:01,000 --> 00:00:02,000\r\nHi\r\n\r\n2\r\n00:00:03,000 --> 00:00:04,000\r\nThere\r\n"
    assert [cue.text for cue in parse_subtitles(content)] == ["Hi", "There"]


def test_parse_drops_invalid_blocks():
    content = """00:00:03.000 --> 00:00:02.000
Ends before it starts

00:00:05.000 --> 00:00:05.000
Zero length

00:00:xx.000 --> 00:00:09.000
Bad timestamp

1:2:3:4.000 --> 00:00:09.000
Too many components

00:00:10.000 --> 00:00:11.000
<i></i>

00:00:12.000 --> 00:00:13.000

just some text

00:00:20.000 --> 00:00:21.000
Kept
"""
    assert parse_subtitles(content) == [Cue(start_time=20.0, end_time=21.0, text="Kept")]


def test_parse_keeps_document_order_for_equal_start_times():
    content = """00:00:01.000 --> 00:00:02.000
Top

00:00:01.000 --> 00:00:03.000
Bottom
"""
    assert [cue.text for cue in parse_subtitles(content)] == ["Top", "Bottom"]


def test_parse_empty_content():
    assert parse_subtitles("") == []
    assert parse_subtitles("WEBVTT\n\n") == []


def test_parse_subtitle_file(tmp_path):
    path = tmp_path / "movie.srt"
    path.write_text("\ufeff1\n00:00:01,000 --> 00:00:02,000\nHi\n", encoding="utf-8")
    assert parse_subtitle_file(path) == [Cue(start_time=1.0, end_time=2.0, text="Hi")]


def test_strip_markup():
    assert strip_markup('<font color="red">Red</font> <c.yellow>text</c>') == "Red text"


def test_format_webvtt_reparses_to_same_cues():
    cues = [
        Cue(start_time=1.5, end_time=3.25, text="One"),
        Cue(start_time=3725.0, end_time=3726.5, text="Two\nlines"),
    ]
    content = format_webvtt(cues)
    assert content.startswith("WEBVTT\n\n1\n00:00:01.500 --> 00:00:03.250\nOne")
    assert parse_subtitles(content) == cues
