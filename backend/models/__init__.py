"""
Models package.
Exports all models for easier access.
"""

from .base import FieldSpec, RecordMixin, assert_record_schema, describe_record, utcnow
from .person import Person

__all__ = [
    "FieldSpec",
    "Person",
    "RecordMixin",
    "assert_record_schema",
    "describe_record",
    "utcnow",
]
