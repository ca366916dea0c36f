# pdf_gallery/models/pdf.py
from datetime import datetime
from typing import List

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship

from ..database import Base


class PdfTag(Base):
    __tablename__ = "pdf_tags"

    id = Column(Integer, primary_key=True, index=True)
    pdf_id = Column(Integer, ForeignKey("pdfs.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    tag = Column(String(255), nullable=False)

    pdf = relationship("PdfDocument", back_populates="tag_rows")


class PdfDocument(Base):
    __tablename__ = "pdfs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_public = Column(Boolean, nullable=False, default=False)
    file_size = Column(Integer, nullable=False)
    file_path = Column(String(512), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

    owner = relationship("User", back_populates="pdfs")
    tag_rows = relationship("PdfTag", back_populates="pdf",
                            cascade="all, delete-orphan", order_by="PdfTag.position")

    @property
    def tags(self) -> List[str]:
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values: List[str]) -> None:
        self.tag_rows = [PdfTag(position=idx, tag=value) for idx, value in enumerate(values)]

    @property
    def uploaded_by(self) -> str | None:
        return self.owner.username if self.owner else None
