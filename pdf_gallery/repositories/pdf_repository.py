# pdf_gallery/repositories/pdf_repository.py
"""SQLAlchemy adapter for the PDF store."""
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import and_, case, func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from ..models import PdfDocument, PdfTag
from ..services.query import QuerySpec, SearchField, TextMatch, Visibility

LIKE_ESCAPE = "\\"


def like_pattern(text: str) -> str:
    """Substring pattern with LIKE wildcards in ``text`` matched literally"""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def visibility_clause(visibility: Visibility):
    owned = PdfDocument.owner_id == visibility.owner_id
    if visibility.private_only:
        return and_(owned, PdfDocument.is_public.is_(False))
    if visibility.include_public:
        return or_(owned, PdfDocument.is_public.is_(True))
    return owned


def text_clause(text: TextMatch):
    pattern = like_pattern(text.text)
    clauses = []
    if SearchField.TITLE in text.fields:
        clauses.append(PdfDocument.title.ilike(pattern, escape=LIKE_ESCAPE))
    if SearchField.DESCRIPTION in text.fields:
        clauses.append(PdfDocument.description.ilike(pattern, escape=LIKE_ESCAPE))
    if SearchField.TAGS in text.fields and text.tag_terms:
        clauses.append(PdfDocument.tag_rows.any(or_(*[
            PdfTag.tag.ilike(like_pattern(term), escape=LIKE_ESCAPE)
            for term in text.tag_terms
        ])))
    if not clauses:
        # Nothing left to match against, e.g. a tag search made only of commas
        return PdfDocument.id.is_(None)
    return or_(*clauses)


@dataclass
class OwnerStats:
    total_pdfs: int = 0
    public_pdfs: int = 0
    private_pdfs: int = 0
    total_bytes: int = 0


class PdfRepository:
    def __init__(self, db: Session):
        self.db = db

    def find(self, spec: QuerySpec) -> List[PdfDocument]:
        query = self.db.query(PdfDocument).options(
            joinedload(PdfDocument.owner),
            selectinload(PdfDocument.tag_rows),
        ).filter(visibility_clause(spec.visibility))

        if spec.text is not None:
            query = query.filter(text_clause(spec.text))

        if spec.created_after is not None:
            query = query.filter(PdfDocument.created_at >= spec.created_after)

        column = getattr(PdfDocument, spec.sort.field)
        return query.order_by(
            column.desc() if spec.sort.descending else column.asc(),
            PdfDocument.id.asc(),
        ).all()

    def get(self, pdf_id: int) -> Optional[PdfDocument]:
        return self.db.query(PdfDocument) \
            .options(joinedload(PdfDocument.owner), selectinload(PdfDocument.tag_rows)) \
            .filter(PdfDocument.id == pdf_id) \
            .first()

    def add(self, pdf: PdfDocument) -> PdfDocument:
        self.db.add(pdf)
        self.db.commit()
        self.db.refresh(pdf)
        return pdf

    def save(self, pdf: PdfDocument) -> PdfDocument:
        self.db.commit()
        self.db.refresh(pdf)
        return pdf

    def delete(self, pdf: PdfDocument) -> None:
        self.db.delete(pdf)
        self.db.commit()

    def owner_stats(self, owner_id: int) -> OwnerStats:
        row = self.db.query(
            func.count(PdfDocument.id),
            func.sum(case((PdfDocument.is_public.is_(True), 1), else_=0)),
            func.sum(case((PdfDocument.is_public.is_(False), 1), else_=0)),
            func.sum(PdfDocument.file_size),
        ).filter(PdfDocument.owner_id == owner_id).one()

        return OwnerStats(
            total_pdfs=row[0] or 0,
            public_pdfs=row[1] or 0,
            private_pdfs=row[2] or 0,
            total_bytes=row[3] or 0,
        )
