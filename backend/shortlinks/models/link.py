import uuid

from sqlalchemy import Column, Integer, String, DateTime
from ..database import Base


def new_link_id() -> str:
    return uuid.uuid4().hex


class Link(Base):
    """Short link model"""
    __tablename__ = "links"

    id = Column(String(32), primary_key=True, default=new_link_id)
    short_code = Column(String(8), unique=True, index=True, nullable=False)
    original_url = Column(String(2048), nullable=False)
    clicks = Column(Integer, nullable=False, default=0)
    last_clicked_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Link {self.short_code} -> {self.original_url}>"
