"""Slug generation for tenant URLs."""

import re
import unicodedata
from uuid import uuid4

MAX_SLUG_LENGTH = 255


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a name.

    Folds accented letters to ASCII, lowercases, drops everything except
    ASCII word characters, spaces and hyphens, then collapses runs of
    spaces/hyphens into one hyphen.
    Falls back to a random ``tenant-xxxxxxxx`` slug when nothing is left.

    Examples:
        >>> generate_slug("My Company Name")
        'my-company-name'
        >>> generate_slug("Hello! World@2024")
        'hello-world2024'
        >>> generate_slug("Café Zürich")
        'cafe-zurich'
    """
    slug = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = slug.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"[-\s]+", "-", slug).strip("-")
    if not slug:
        slug = f"tenant-{uuid4().hex[:8]}"
    return slug[:max_length]
