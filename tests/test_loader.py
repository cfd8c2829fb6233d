import pytest
import requests

from cuekit import downloader
from cuekit.downloader import FetchError, download_subtitles, fetch_text, is_hls_playlist, is_m3u8_url
from cuekit.hls.loader import MasterPlaylistLoader
from cuekit.models import AudioTrackInfo, FetchConfig, ManifestCache

MASTER_URL = "https://cdn.example.com/show/master.m3u8"

MASTER = "\n".join([
    "#EXTM3U",
    '#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="a1",NAME="1. Eng",LANGUAGE="eng",URI="eng.m3u8"',
    '#EXT-X-STREAM-INF:BANDWIDTH=800000,AUDIO="a1"',
    "video.m3u8",
])

TRACKS = [AudioTrackInfo(index=1, language_code="eng", display_name="English 5.1")]


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code
        self.encoding = None

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeGet:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, url, timeout=None, verify=None, headers=None):
        self.calls.append({"url": url, "timeout": timeout, "verify": verify, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_load_rewrites_and_caches(monkeypatch):
    fake_get = FakeGet(FakeResponse(MASTER))
    monkeypatch.setattr(downloader.requests, "get", fake_get)

    loader = MasterPlaylistLoader(MASTER_URL, TRACKS, config=FetchConfig(timeout=5, verify_ssl=False))
    playlist = loader.load()

    assert 'NAME="English 5.1"' in playlist
    assert "https://cdn.example.com/show/video.m3u8" in playlist
    assert loader.cache.original_text == MASTER
    assert loader.cache.rewritten_text == playlist

    assert loader.load() == playlist
    assert len(fake_get.calls) == 1
    assert fake_get.calls[0]["timeout"] == 5
    assert fake_get.calls[0]["verify"] is False


def test_refresh_failure_serves_last_rewritten(monkeypatch):
    fake_get = FakeGet(FakeResponse(MASTER), requests.ConnectionError("offline"))
    monkeypatch.setattr(downloader.requests, "get", fake_get)

    loader = MasterPlaylistLoader(MASTER_URL, TRACKS)
    first = loader.load()
    assert loader.load(refresh=True) == first
    assert len(fake_get.calls) == 2


def test_failure_falls_back_to_original_text(monkeypatch):
    monkeypatch.setattr(downloader.requests, "get", FakeGet(FakeResponse("", status_code=503)))

    cache = ManifestCache(original_text=MASTER)
    loader = MasterPlaylistLoader(MASTER_URL, TRACKS, cache=cache)
    assert loader.load() == MASTER


def test_failure_without_cache_raises(monkeypatch):
    monkeypatch.setattr(downloader.requests, "get", FakeGet(requests.Timeout("slow")))

    loader = MasterPlaylistLoader(MASTER_URL, TRACKS)
    with pytest.raises(FetchError):
        loader.load()


def test_non_playlist_content_is_not_rewritten(monkeypatch):
    monkeypatch.setattr(downloader.requests, "get", FakeGet(FakeResponse("<html>login</html>")))

    loader = MasterPlaylistLoader(MASTER_URL, TRACKS)
    assert loader.load() == "<html>login</html>"
    assert loader.cache.rewritten_text is None


def test_loader_reads_local_files(tmp_path):
    path = tmp_path / "master.m3u8"
    path.write_text(MASTER, encoding="utf-8")

    playlist = MasterPlaylistLoader(path.as_uri(), TRACKS).load()
    assert 'NAME="English 5.1"' in playlist
    assert (tmp_path / "video.m3u8").as_uri() in playlist


def test_fetch_text_missing_file_raises(tmp_path):
    with pytest.raises(FetchError):
        fetch_text(str(tmp_path / "missing.vtt"))


def test_fetch_text_strips_bom(monkeypatch):
    monkeypatch.setattr(downloader.requests, "get", FakeGet(FakeResponse("\ufeffWEBVTT\n")))
    assert fetch_text("https://cdn.example.com/subs.vtt") == "WEBVTT\n"


def test_download_subtitles(monkeypatch):
    srt = "1\n00:00:01,000 --> 00:00:02,500\nHello\n"
    monkeypatch.setattr(downloader.requests, "get", FakeGet(FakeResponse(srt)))

    cues = download_subtitles("https://cdn.example.com/subs.srt")
    assert [(cue.start_time, cue.end_time, cue.text) for cue in cues] == [(1.0, 2.5, "Hello")]


def test_is_hls_playlist_and_url():
    assert is_hls_playlist("\ufeff#EXTM3U\n#EXT-X-VERSION:3")
    assert not is_hls_playlist("WEBVTT")
    assert is_m3u8_url("https://cdn.example.com/master.m3u8?token=abc")
    assert not is_m3u8_url("https://cdn.example.com/subs.vtt")
