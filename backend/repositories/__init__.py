"""Access Objects: the only layer that reads or writes the record store."""

from .base import BaseDAO, Page, next_timestamp
from .people import PeopleDAO

__all__ = ["BaseDAO", "Page", "PeopleDAO", "next_timestamp"]
