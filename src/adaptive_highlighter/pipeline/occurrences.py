"""
Locate candidate phrases in the corrected text.

Matches are case-insensitive and respect the tokenizer's word boundaries:
"light" does not match inside "lighting" or "slow-light", and the words of a
phrase may be separated by whitespace or punctuation other than a sentence
break.
"""

import re
from functools import lru_cache
from typing import List, Tuple

# Not inside a token: no word char, and no joiner (' or -) attached to one
_LEFT_BOUNDARY = r"(?<!\w)(?<!\w['\-])"
_RIGHT_BOUNDARY = r"(?!\w)(?!['\-]\w)"

# Anything between two words except sentence terminators; a lone ' or -
# would join the words into one token
_WORD_GAP = r"[^\w.!?;\n]*[^\w.!?;\n'\-][^\w.!?;\n]*"


@lru_cache(maxsize=4096)
def phrase_pattern(phrase: str) -> re.Pattern:
    """
    Compile the occurrence pattern of a space-joined phrase.

    Examples:
        >>> bool(phrase_pattern("depth of field").search("Depth-of field"))
        False
        >>> bool(phrase_pattern("depth of field").search("DEPTH OF  FIELD"))
        True
    """
    words = [re.escape(w) for w in phrase.split()]
    body = _WORD_GAP.join(words)
    return re.compile(f"{_LEFT_BOUNDARY}{body}{_RIGHT_BOUNDARY}", re.IGNORECASE)


def find_occurrences(text: str, phrase: str) -> List[Tuple[int, int]]:
    """
    All non-overlapping [start, end) spans of phrase in text.

    Examples:
        >>> find_occurrences("Soft light, soft lighting, soft light.", "soft light")
        [(0, 10), (27, 37)]
    """
    if not text or not phrase.strip():
        return []
    return [m.span() for m in phrase_pattern(phrase).finditer(text)]
