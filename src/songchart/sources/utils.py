"""Helpers shared by the chart sources.

Charts usually live inside Markdown notes as fenced code blocks tagged
``song``::

    Some prose about the song.

    ```song
    [Intro]
    |  IIm   V7  |  Imaj7
    No existe un momento del día,
    ```

:func:`extract_song_blocks` pulls the chart text out of such notes.  Text
without any ``song`` fence is taken to be a bare chart.
"""

import re

SONG_FENCE_RE = re.compile(
    r"^[ \t]*```[ \t]*song[ \t]*\r?\n"  # opening fence with the "song" info string
    r"(.*?)"
    r"^[ \t]*```",  # closing fence
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)


def extract_song_blocks(text: str) -> str:
    """Return the bodies of all ``song`` fences, joined by a blank line.

    Returns *text* unchanged when it contains no ``song`` fence.
    """
    blocks = [body.rstrip("\r\n") for body in SONG_FENCE_RE.findall(text)]
    if not blocks:
        return text
    return "\n\n".join(blocks)
