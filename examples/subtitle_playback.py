"""
External subtitle example.

Downloads an SRT file and simulates playback ticks, printing each cue change.
"""

from cuekit import ExternalSubtitleState, download_subtitles

def main():
    state = ExternalSubtitleState(on_change=lambda cue: print(cue.text if cue else "-"))
    state.load_cues(download_subtitles("https://example.com/subtitles/movie.en.srt"))

    # 4 ticks per second for the first minute
    for tick in range(240):
        state.update_time(tick / 4)

if __name__ == "__main__":
    main()
