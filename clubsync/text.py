import re

_DISALLOWED = re.compile(r"[^A-Za-z0-9@._\-\s]")
_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """
    Normalize a free-text contact field.

    Drops punctuation and symbols outside ``[A-Za-z0-9@._-]``, collapses
    whitespace runs to a single space and trims the result.

    Args:
        text (str): Raw field value.

    Returns:
        str: Normalized value. ``clean_text(clean_text(x)) == clean_text(x)``.
    """
    # Strip first, then collapse: "a & b" -> "a b"
    stripped = _DISALLOWED.sub("", text)
    return _WHITESPACE.sub(" ", stripped).strip()
