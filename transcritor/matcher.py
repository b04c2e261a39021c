"""
Accent-insensitive whole-word matching.

Portuguese text shows up with every kind of accent and capitalisation
mix ("ALMA", "álma", "almà").  The helpers in this module turn a plain
word into a compiled regular expression that finds all of those
variants, but only when they stand as a whole word.
"""

import re
import unicodedata
from functools import lru_cache

# Every case/accent variant recognised for a base letter.
ACCENT_CLASSES = {
    "a": "[aAáÁàÀãÃâÂäÄ]",
    "e": "[eEéÉèÈêÊëË]",
    "i": "[iIíÍìÌîÎïÏ]",
    "o": "[oOóÓòÒõÕôÔöÖ]",
    "u": "[uUúÚùÙûÛüÜ]",
    "c": "[cçCÇ]",
}

# Letters, digits and the Latin-1 accented range count as part of a word,
# and so do the private-use placeholders the engine writes for protected
# replacements.
_BOUNDARY_LEFT = r"(?<![a-zA-Z0-9\u00C0-\u00FF\ue000-\ue1ff])"
_BOUNDARY_RIGHT = r"(?![a-zA-Z0-9\u00C0-\u00FF\ue000-\ue1ff])"

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")


def remove_accents(text: str) -> str:
    """Strip diacritical marks, keeping the base letters and their case."""
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", text))


def accent_pattern(word: str) -> str:
    """Return the regex source matching ``word`` as a whole word.

    Vowels and ``c`` are widened to their accent classes; every other
    character is matched literally.
    """
    parts = []
    for char in remove_accents(word):
        parts.append(ACCENT_CLASSES.get(char.lower()) or re.escape(char))
    return f"{_BOUNDARY_LEFT}{''.join(parts)}{_BOUNDARY_RIGHT}"


@lru_cache(maxsize=1024)
def build_matcher(word: str) -> "re.Pattern[str]":
    """Compile a case- and accent-insensitive whole-word matcher.

    Args:
        word: The word to look for.  It may itself carry accents.

    Returns:
        A compiled pattern.  Use it with ``sub`` to replace every
        occurrence in one pass.
    """
    # ASCII case folding only; accented letters are covered by the classes.
    return re.compile(accent_pattern(word), re.IGNORECASE | re.ASCII)


def replace_word(text: str, word: str, replacement: str) -> str:
    """Replace every whole-word occurrence of ``word`` in ``text``.

    ``replacement`` is inserted verbatim, backslashes included.
    """
    return build_matcher(word).sub(lambda _match: replacement, text)
