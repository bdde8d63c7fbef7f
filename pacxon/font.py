"""
Bitmap fonts for the flipdot panel.

``BIG`` holds 5x5 glyphs used for headings and menus, ``SMALL`` 3x5 digits
used in the in-game HUD. Rows are encoded as strings separated by ``/``.
"""

from typing import Dict, Tuple

Glyph = Tuple[str, ...]


def _glyphs(table: Dict[str, str]) -> Dict[str, Glyph]:
    return {ch: tuple(rows.split('/')) for ch, rows in table.items()}


BIG: Dict[str, Glyph] = _glyphs({
    'A': ".####/#...#/#####/#...#/#...#",
    'B': "####./#...#/#####/#...#/#####",
    'C': ".####/#..../#..../#..../#####",
    'D': "####./#...#/#...#/#...#/#####",
    'E': "#####/#..../####./#..../#####",
    'F': "#####/#..../####./#..../#....",
    'G': ".####/#..../#..##/#...#/#####",
    'H': "#...#/#...#/#####/#...#/#...#",
    'I': "#####/..#../..#../..#../#####",
    'J': "....#/....#/....#/#...#/#####",
    'K': "#...#/#..#./###../#..#./#...#",
    'L': "#..../#..../#..../#..../#####",
    'M': "#...#/##.##/#.#.#/#...#/#...#",
    'N': "#...#/##..#/#.#.#/#..##/#...#",
    'O': ".###./#...#/#...#/#...#/.###.",
    'P': "####./#...#/####./#..../#....",
    'Q': ".###./#...#/#.#.#/#..#./.##.#",
    'R': "####./#...#/####./#..#./#...#",
    'S': ".####/#..../.###./....#/####.",
    'T': "#####/..#../..#../..#../..#..",
    'U': "#...#/#...#/#...#/#...#/#####",
    'V': "#...#/#...#/#...#/.#.#./..#..",
    'W': "#...#/#...#/#.#.#/##.##/#...#",
    'X': "#...#/.#.#./..#../.#.#./#...#",
    'Y': "#...#/.#.#./..#../..#../..#..",
    'Z': "#####/...#./..#../.#.../#####",
    '0': ".###./#..##/#.#.#/##..#/.###.",
    '1': "..#../.##../..#../..#../.###.",
    '2': "####./....#/.###./#..../#####",
    '3': "####./....#/.###./....#/####.",
    '4': "#...#/#...#/#####/....#/....#",
    '5': "#####/#..../####./....#/####.",
    '6': ".###./#..../####./#...#/.###.",
    '7': "#####/....#/...#./..#../..#..",
    '8': ".###./#...#/.###./#...#/.###.",
    '9': ".###./#...#/.####/....#/.###.",
    ':': "./#/./#/.",
    '!': "#/#/#/./#",
    '.': "././././#",
    ',': "./././#/#",
    '?': "####./....#/..##./...../..#..",
    '-': "...../...../#####/...../.....",
})

SMALL: Dict[str, Glyph] = _glyphs({
    '0': "###/#.#/#.#/#.#/###",
    '1': ".#./##./.#./.#./###",
    '2': "###/..#/###/#../###",
    '3': "###/..#/###/..#/###",
    '4': "#.#/#.#/###/..#/..#",
    '5': "###/#../###/..#/###",
    '6': "###/#../###/#.#/###",
    '7': "###/..#/..#/.#./.#.",
    '8': "###/#.#/###/#.#/###",
    '9': "###/#.#/###/..#/###",
})

GLYPH_HEIGHT = 5
BIG_SPACING = 2
SMALL_SPACING = 1
SPACE_ADVANCE = 4


def big_text_width(text: str) -> int:
    """Horizontal advance of ``text`` in the big font, trailing spacing included."""
    width = 0
    for ch in text.upper():
        if ch == ' ':
            width += SPACE_ADVANCE
            continue
        glyph = BIG.get(ch)
        if glyph:
            width += len(glyph[0]) + BIG_SPACING
    return width


def small_text_width(text: str) -> int:
    return sum(len(SMALL[ch][0]) + SMALL_SPACING for ch in text if ch in SMALL)
