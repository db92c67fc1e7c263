from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Optional

from sparkboard.models.base import check_choice, isoformat, new_id
from sparkboard.utils.timezone_utils import utcnow


INTERACTION_TYPES = ('call', 'email', 'meeting', 'note')
INTERACTION_OUTCOMES = ('positive', 'neutral', 'negative')


@dataclass
class Interaction:
    """Interaction model - calls, emails, meetings and notes logged against one contact"""
    contact_id: str
    contact_name: str  # denormalized for listing
    subject: str
    description: str
    date: date
    type: str = 'call'
    duration: Optional[int] = None  # minutes
    outcome: str = 'neutral'
    follow_up: Optional[date] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        check_choice(self.type, INTERACTION_TYPES, 'interaction type')
        check_choice(self.outcome, INTERACTION_OUTCOMES, 'interaction outcome')
        if self.duration is not None and self.duration < 0:
            raise ValueError(f'Invalid interaction duration {self.duration!r}; must be >= 0')

    def __repr__(self):
        return f'<Interaction {self.type}: {self.subject}>'

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    def to_dict(self):
        """Convert interaction to dictionary"""
        return {
            'id': self.id,
            'contact_id': self.contact_id,
            'contact_name': self.contact_name,
            'type': self.type,
            'subject': self.subject,
            'description': self.description,
            'date': isoformat(self.date),
            'duration': self.duration,
            'outcome': self.outcome,
            'follow_up': isoformat(self.follow_up),
            'created_at': isoformat(self.created_at),
        }
