"""Subjects: fluent assertions on a value under test."""

from verdict.subjects.base import Subject, SubjectContext
from verdict.subjects.mapping import MapSubject, MapValuesComparison, Ordered

__all__ = [
    "Subject",
    "SubjectContext",
    "MapSubject",
    "MapValuesComparison",
    "Ordered",
]
