# tests/utils/test_tags.py
import pytest

from pdf_gallery.utils.tags import normalize_tags

@pytest.mark.parametrize("raw,expected", [
    ("work, 2024", ["work", "2024"]),
    (" a ,, b ,", ["a", "b"]),
    ("", []),
    (None, []),
    (["x", " y ", ""], ["x", "y"]),
    (["p,q", "r"], ["p", "q", "r"]),
    ("Same, same", ["Same", "same"]),
])
def test_normalize_tags(raw, expected):
    assert normalize_tags(raw) == expected
