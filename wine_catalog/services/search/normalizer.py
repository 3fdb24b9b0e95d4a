"""String normalization for fuzzy comparison."""
import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase and drop every whitespace run (no separator left behind).

    >>> normalize("Cabernet  Sauvignon")
    'cabernetsauvignon'
    """
    return _WHITESPACE_RE.sub("", text.lower())


def split_words(text: str) -> list[str]:
    """Lowercased whitespace-separated words, empty words dropped."""
    return text.lower().split()
