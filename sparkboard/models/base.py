"""Helpers shared by the CRM and board dataclasses"""
import uuid
from datetime import date, datetime

from sparkboard.utils.input_validators import sanitize_tag


def new_id():
    return uuid.uuid4().hex


def check_choice(value, choices, field_name):
    """Raise ValueError when value is not one of choices"""
    if value not in choices:
        raise ValueError(f"Invalid {field_name} {value!r}; expected one of {', '.join(choices)}")
    return value


def unique(values):
    """Drop duplicates, keeping first occurrences in order"""
    return list(dict.fromkeys(values or []))


def isoformat(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class TaggableMixin:
    """Tags behave as an insertion-ordered set of exact strings"""

    def add_tag(self, tag):
        """Add a tag; no-op when blank or already present. Returns True if added"""
        tag = sanitize_tag(tag)
        if not tag or tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, tag):
        """Remove a tag by exact match after trimming, keeping the order of the rest"""
        tag = sanitize_tag(tag)
        if not tag or tag not in self.tags:
            return False
        self.tags = [t for t in self.tags if t != tag]
        return True
