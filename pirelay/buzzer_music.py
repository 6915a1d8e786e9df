"""Melodies played on a piezo buzzer through a software tone generator.

The board object must provide soft_tone_create(pin),
soft_tone_write(pin, frequency) and delay(milliseconds).
"""

from __future__ import annotations

import threading

SPEAKER_PIN = 26

C1, C1_S = 523, 554
D1, D1_S = 587, 622
E1 = 659
F1, F1_S = 698, 740
G1, G1_S = 784, 831
A1, A1_S = 880, 932
B1 = 988
C2, C2_S = 1046, 1109
D2, D2_S = 1178, 1245
E2 = 1319
F2, F2_S = 1397, 1480
G2, G2_S = 1568, 1661
A2, A2_S = 1760, 1865
B2 = 1976
C3 = 1046 * 2

REST = 99

WHOLE = 16
HALF = 8
QUARTER = 4
DOTTED_QUARTER = 6
EIGHTH = 2
DOTTED_EIGHTH = 3
SIXTEENTH = 1

BPM = 120
NOTE_UNIT_MS = 60000 // BPM // 4
NOTE_GAP_MS = NOTE_UNIT_MS // 4

SONG1_NOTES = (
    REST, A1, G1_S, A1, E1,
    REST, C2_S, B1, A1, G1_S,
    REST, C2_S, C2, C2_S, D2, C2_S,
    B1, C2_S, G1_S,
)

SONG1_LENGTHS = (
    EIGHTH, QUARTER, EIGHTH, EIGHTH, QUARTER,
    EIGHTH, QUARTER, EIGHTH, EIGHTH, QUARTER,
    EIGHTH, QUARTER, EIGHTH, QUARTER, QUARTER, QUARTER,
    QUARTER, EIGHTH, QUARTER,
)

SONG2_NOTES = (
    C1, E1, G1, REST, A1,
    C2, E2, C2, D2, E2,
    REST, C2, C2, C2, C2,
    C2, C2, C2, C2, A1,
    G1, D2, E2, REST, C2,
)

SONG2_LENGTHS = (
    SIXTEENTH, EIGHTH, EIGHTH, EIGHTH, DOTTED_EIGHTH,
    DOTTED_EIGHTH, DOTTED_EIGHTH, DOTTED_EIGHTH, QUARTER, EIGHTH,
    DOTTED_QUARTER, EIGHTH, EIGHTH, EIGHTH, EIGHTH,
    EIGHTH, EIGHTH, EIGHTH, EIGHTH, EIGHTH,
    DOTTED_EIGHTH, EIGHTH, EIGHTH, SIXTEENTH, QUARTER,
)

SONG3_NOTES = (
    G1, REST, A1, REST, C2,
    E2, E2, C2, D2, REST, C2,
    G1, REST, A1, REST, C2,
    E2, E2, C2, D2, REST, C2,
    G1, REST, A1, REST, C2,
    E2, E2, C2, D2, REST, C2,
    G1, REST, A1, REST, C2,
    E2, G2, C2, C3, REST, D2,
)

SONG3_LENGTHS = (
    EIGHTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
    SIXTEENTH, SIXTEENTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
    EIGHTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
    SIXTEENTH, SIXTEENTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
    EIGHTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
    SIXTEENTH, SIXTEENTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
    EIGHTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
    SIXTEENTH, SIXTEENTH, SIXTEENTH, SIXTEENTH, EIGHTH, EIGHTH,
)

# Selection 0 is timed with the second song's length table, as on the device.
_SONGS = {
    0: (SONG1_NOTES, SONG2_LENGTHS, 1.0),
    1: (SONG2_NOTES, SONG2_LENGTHS, 1.0),
    2: (SONG3_NOTES, SONG3_LENGTHS, 1.5),
}

_tone_lock = threading.Lock()


def song_events(music_sel: int) -> list[tuple[int, int]]:
    """Return (frequency, duration in ms) for each note of a song; 0 Hz is a rest."""
    try:
        notes, lengths, divisor = _SONGS[music_sel]
    except KeyError:
        raise ValueError("music selection must be 0, 1 or 2") from None
    return [
        (0 if note == REST else note // 2, int(length * NOTE_UNIT_MS / divisor))
        for note, length in zip(notes, lengths)
    ]


def play(board, music_sel: int) -> int:
    """Play song 0, 1 or 2 on the buzzer, silencing it briefly between notes."""
    board.soft_tone_create(SPEAKER_PIN)
    for frequency, duration in song_events(music_sel):
        with _tone_lock:
            board.soft_tone_write(SPEAKER_PIN, frequency)
        board.delay(duration)
        with _tone_lock:
            board.soft_tone_write(SPEAKER_PIN, 0)
        board.delay(NOTE_GAP_MS)
    return 0