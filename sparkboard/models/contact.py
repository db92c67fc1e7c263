from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import List, Optional

from sparkboard.models.base import TaggableMixin, check_choice, isoformat, new_id, unique
from sparkboard.utils.timezone_utils import utcnow


# Any status may follow any other; there is no lifecycle order
CONTACT_STATUSES = ('lead', 'prospect', 'customer', 'inactive')


@dataclass
class Contact(TaggableMixin):
    """Contact model - individual people at companies"""
    name: str
    email: str = ''
    phone: str = ''  # digits only
    company: str = ''  # company *name*; a lookup key, not an ownership link
    position: str = ''
    status: str = 'lead'
    last_contact: Optional[date] = None
    tags: List[str] = field(default_factory=list)
    source: str = ''
    notes: str = ''
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        check_choice(self.status, CONTACT_STATUSES, 'contact status')
        self.tags = unique(self.tags)

    def __repr__(self):
        return f'<Contact {self.name} ({self.company})>'

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    def to_dict(self):
        """Convert contact to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'company': self.company,
            'position': self.position,
            'status': self.status,
            'last_contact': isoformat(self.last_contact),
            'tags': list(self.tags),
            'source': self.source,
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
        }
