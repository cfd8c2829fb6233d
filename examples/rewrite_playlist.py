"""
Playlist rewriting example.

Fetches an HLS master playlist, renames its audio renditions and prints the result.
"""

import logging

from cuekit import MasterPlaylistLoader, PlayerAudioTrack, audio_track_infos

def main():
    logging.basicConfig(level=logging.DEBUG)

    tracks = [
        PlayerAudioTrack("0", "rus", "Русский, дубляж", is_default=True),
        PlayerAudioTrack("1", "eng", "English, original 5.1"),
    ]

    loader = MasterPlaylistLoader(
        "https://example.com/show/master.m3u8",
        audio_track_infos(tracks),
    )
    print(loader.load())

if __name__ == "__main__":
    main()
