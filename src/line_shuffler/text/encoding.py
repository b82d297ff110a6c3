"""Normalisation of arbitrary bytes to valid UTF-8 text."""

import unicodedata
from collections.abc import Iterable, Iterator

from line_shuffler.source.reader import LineSource

# Letters that do not decompose into base letter + combining mark.
LIGATURES = {
    "ß": "ss",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "þ": "th",
    "Þ": "Th",
    "ð": "d",
    "Ð": "D",
    "ı": "i",
}

_STROKE_SUFFIX = " WITH STROKE"


def convert_to_valid_utf8(raw: bytes, possible_encodings: Iterable[str] = ()) -> str:
    """
    Decode raw into text.

    Valid UTF-8 is returned as-is. Otherwise each candidate encoding is
    tried in order; if none decodes cleanly, invalid bytes are dropped.
    Unknown encoding names raise LookupError.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    for encoding in possible_encodings:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue

    return raw.decode("utf-8", errors="ignore")


def _ascii_char(ch: str) -> str:
    if ch.isascii():
        return ch
    if ch in LIGATURES:
        return LIGATURES[ch]

    # Stroke letters such as ø or ł have no decomposition; use the name.
    name = unicodedata.name(ch, "")
    if name.endswith(_STROKE_SUFFIX):
        base = name[: -len(_STROKE_SUFFIX)].rsplit(" ", 1)[-1]
        if len(base) == 1:
            return base if "CAPITAL" in name else base.lower()

    decomposed = unicodedata.normalize("NFKD", ch)
    return "".join(c for c in decomposed if c.isascii())


def transliterate(text: str) -> str:
    """Transliterate text to an ASCII approximation: 'Łódź' -> 'Lodz'."""
    if text.isascii():
        return text
    return "".join(_ascii_char(ch) for ch in text)


def each_line_in_file(
    path: str,
    to_ascii: bool = False,
    possible_encodings: Iterable[str] = (),
) -> Iterator[str]:
    """Yield the lines of path as valid UTF-8 text, terminators included."""
    encodings = tuple(possible_encodings)
    with LineSource(path) as source:
        for raw in source:
            line = convert_to_valid_utf8(raw, encodings)
            yield transliterate(line) if to_ascii else line
