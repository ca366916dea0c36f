# pdf_gallery/utils/tags.py
from typing import Iterable, List, Union


def normalize_tags(raw: Union[str, Iterable[str], None]) -> List[str]:
    """Turn user-supplied tags into the stored form.

    Accepts the comma-separated string sent by the upload form or a list of
    strings (each of which may itself contain commas). Entries are trimmed
    and empty ones dropped; order is preserved.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]

    tags = []
    for chunk in raw:
        for tag in str(chunk).split(","):
            tag = tag.strip()
            if tag:
                tags.append(tag)
    return tags


def split_search_terms(search: str) -> List[str]:
    """Split a tag search string on commas, dropping blank terms"""
    return normalize_tags(search)
