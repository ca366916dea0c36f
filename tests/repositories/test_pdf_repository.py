# tests/repositories/test_pdf_repository.py
from datetime import datetime, timedelta

import pytest

from pdf_gallery.models import PdfDocument
from pdf_gallery.repositories import PdfRepository
from pdf_gallery.repositories.pdf_repository import like_pattern
from pdf_gallery.services.query import ListParams, build_query


@pytest.fixture
def gallery(alice, bob, make_pdf):
    now = datetime.now()
    return [
        make_pdf(alice, "Invoice March", tags=["work", "2024"], file_size=500,
                 created_at=now - timedelta(days=20)),
        make_pdf(alice, "holiday photos", description="Beach invoice receipts", is_public=True,
                 file_size=9000, created_at=now - timedelta(days=3)),
        make_pdf(alice, "notes", tags=["Personal"], file_size=500, created_at=now - timedelta(hours=2)),
        make_pdf(bob, "Bob invoice", tags=["work"], file_size=700, created_at=now - timedelta(days=1)),
        make_pdf(bob, "Bob shared", tags=["invoices"], is_public=True, file_size=100,
                 created_at=now - timedelta(days=40)),
    ]


@pytest.mark.parametrize("raw", [
    {},
    {"search": "invoice"},
    {"search": "invoice", "search_by": "title"},
    {"search": "INVOICE", "search_by": "description"},
    {"search": "work, personal", "search_by": "tags"},
    {"filter": "private"},
    {"filter": "public", "sort": "size"},
    {"date_filter": "week", "sort": "oldest"},
    {"date_filter": "month", "sort": "name"},
    {"search": "bob", "filter": "private"},
])
def test_sql_matches_in_memory_evaluation(db_session, alice, gallery, raw):
    """The SQL adapter and QuerySpec.apply agree on membership and order"""
    spec = build_query(alice.id, ListParams.parse(**raw))

    from_sql = PdfRepository(db_session).find(spec)
    in_memory = spec.apply(db_session.query(PdfDocument).all())

    assert [p.id for p in from_sql] == [p.id for p in in_memory]


def test_find_never_returns_others_private(db_session, alice, bob, gallery):
    for raw in ({}, {"filter": "public"}, {"filter": "private"}, {"search": "bob"}):
        spec = build_query(alice.id, ListParams.parse(**raw))
        for pdf in PdfRepository(db_session).find(spec):
            assert pdf.owner_id == alice.id or pdf.is_public


def test_find_loads_owner(db_session, alice, gallery):
    pdfs = PdfRepository(db_session).find(build_query(alice.id, ListParams()))
    assert {p.uploaded_by for p in pdfs} == {"alice", "bob"}


def test_owner_stats(db_session, alice, bob, gallery):
    stats = PdfRepository(db_session).owner_stats(alice.id)

    assert stats.total_pdfs == 3
    assert stats.public_pdfs == 1
    assert stats.private_pdfs == 2
    assert stats.total_bytes == 10000


def test_like_pattern_escapes_wildcards():
    assert like_pattern("50%_off\\") == "%50\\%\\_off\\\\%"


@pytest.mark.parametrize("raw", [
    {"search": "über", "search_by": "title"},
    {"search": "ÜBER"},
    {"search": "straße", "search_by": "description"},
    {"search": "école", "search_by": "tags"},
])
def test_search_folds_non_ascii_case(db_session, alice, make_pdf, raw):
    match = make_pdf(alice, "Über Bericht", description="STRAßE plans", tags=["École"])
    make_pdf(alice, "Unrelated")
    spec = build_query(alice.id, ListParams.parse(**raw))

    from_sql = PdfRepository(db_session).find(spec)
    in_memory = spec.apply(db_session.query(PdfDocument).all())

    assert [p.id for p in from_sql] == [match.id]
    assert [p.id for p in in_memory] == [match.id]
