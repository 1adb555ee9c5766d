import re
from rapidfuzz.distance import Levenshtein

from clubsync.config import NAME_NOISE

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NOISE = re.compile(re.escape(NAME_NOISE), re.IGNORECASE)


def _squash(text: str) -> str:
    """Lowercase and keep only [a-z0-9]."""
    return _NON_ALNUM.sub("", text.lower())


def strip_name_noise(name: str) -> str:
    """Remove every case-insensitive 'pony club' from a club name."""
    return _NOISE.sub("", name).strip()


def calculate_similarity(str1: str, str2: str) -> float:
    """
    Compute a normalized edit-distance similarity between two names.

    Both strings are lowercased and reduced to [a-z0-9] first, so spacing and
    punctuation never affect the score.

    Args:
        str1 (str): First name.
        str2 (str): Second name.

    Returns:
        float: (max_len - distance) / max_len in [0, 1]; 1.0 for identical
               (including both empty) cleaned strings.
    """
    s1 = _squash(str1)
    s2 = _squash(str2)

    if s1 == s2:
        return 1.0

    # Unit cost insert / delete / substitute
    distance = Levenshtein.distance(s1, s2)
    max_length = max(len(s1), len(s2))
    return (max_length - distance) / max_length
