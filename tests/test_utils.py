import pytest

from cuekit.languages import (
    alternate_language_code,
    guess_language_from_name,
    language_keys,
    normalize_language,
)
from cuekit.utils import parse_timestamp, seconds_to_timestamp


def test_parse_timestamp_hours():
    assert parse_timestamp("01:02:03.456") == pytest.approx(3723.456)


def test_parse_timestamp_minutes_with_comma():
    assert parse_timestamp("02:03,456") == pytest.approx(123.456)


def test_parse_timestamp_unpadded_components():
    assert parse_timestamp("1:2:3") == pytest.approx(3723.0)


@pytest.mark.parametrize("text", ["3:4:5:6", "12", "", "aa:bb.ccc", "-1:00.000", "00:01:xx", "00::01.000"])
def test_parse_timestamp_rejects_malformed(text):
    assert parse_timestamp(text) is None


def test_seconds_to_timestamp():
    assert seconds_to_timestamp(3723.456) == "01:02:03.456"
    assert seconds_to_timestamp(0) == "00:00:00.000"


def test_normalize_language():
    assert normalize_language("en-US") == "en"
    assert normalize_language("RUS") == "rus"
    assert normalize_language("") == "und"
    assert normalize_language(None) == "und"


def test_alternate_language_code():
    assert alternate_language_code("rus") == "ru"
    assert alternate_language_code("ja") == "jpn"
    assert alternate_language_code("xx") == "xx"


def test_language_keys():
    assert language_keys("ENG") == ["eng", "en"]
    assert language_keys("en-US") == ["en-us"]
    assert language_keys(None) == ["und"]


def test_guess_language_from_name():
    assert guess_language_from_name("Dub (rus)") == "ru"
    assert guess_language_from_name("Original eng 5.1") == "en"
    assert guess_language_from_name("Ukrainian") == "uk"
    assert guess_language_from_name("Русский") == "ru"
    assert guess_language_from_name("Track 1") is None
