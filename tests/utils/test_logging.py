# tests/utils/test_logging.py
import logging

from pdf_gallery.utils.logging import GalleryLogger, SensitiveDataFilter

def test_filter_masks_credentials():
    masked = SensitiveDataFilter.mask(
        "password=hunter2 Authorization: Bearer abc.def.ghi postgresql://app:pw@db/gallery"
    )

    assert "hunter2" not in masked
    assert "abc.def.ghi" not in masked
    assert ":pw@" not in masked
    assert "***MASKED***" in masked

def test_filter_masks_record_args():
    record = logging.LogRecord("api", logging.INFO, __file__, 1, "login %s", ("token=xyz",), None)

    assert SensitiveDataFilter().filter(record) is True
    assert record.args == ("token=***MASKED***",)

def test_extra_is_sanitized():
    logger = GalleryLogger("test-extra")
    sanitized = logger._sanitize_extra({"password": "hunter2", "name": "alice", "pdf_id": 3})

    assert sanitized == {"password": "***MASKED***", "extra_name": "alice", "pdf_id": 3}
