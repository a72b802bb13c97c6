"""People Access Object."""

from ..models import Person
from .base import BaseDAO


class PeopleDAO(BaseDAO[Person]):
    """Access Object for the ``people`` table."""

    model = Person
    entity_name = "Person"

    def find_by_email(self, email: str) -> Person | None:
        """Find a person by email (exact match)."""
        return self.find_by_field("email", email)
