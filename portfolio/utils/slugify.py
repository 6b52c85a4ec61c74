import re

from unidecode import unidecode


def slugify(text: str, separator: str = "-") -> str:
    """Lowercase ASCII slug for post file names and tag URLs."""
    text = unidecode(text).lower()
    return re.sub(r"[^a-z0-9]+", separator, text).strip(separator)
