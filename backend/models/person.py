"""
People directory models.
"""

from sqlalchemy import Column, Index, Integer, String, UniqueConstraint

from ..database import Base
from .base import RecordMixin


class Person(RecordMixin, Base):
    """A person in the directory."""

    __tablename__ = "people"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False)
    city = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)

    __table_args__ = (
        UniqueConstraint("email", name="people_email_unique"),
        Index("ix_people_created_at_id", "created_at", "id"),
    )

    # Text columns matched by the list ``search`` filter
    __searchable__ = ("first_name", "last_name", "email", "city", "country")

    def __repr__(self):
        return f"<Person(id={self.id}, email={self.email})>"
