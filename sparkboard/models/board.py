"""Board models: columns and the tasks they hold.

A task's status is the id of the column holding it. Board keeps the two in
step; nothing else should assign Task.status.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional

from sparkboard.models.base import TaggableMixin, check_choice, isoformat, new_id, unique
from sparkboard.utils.timezone_utils import utcnow


TASK_PRIORITIES = ('low', 'medium', 'high', 'urgent')
PRIORITY_RANK = {'low': 1, 'medium': 2, 'high': 3, 'urgent': 4}


@dataclass
class Task(TaggableMixin):
    """A card on the board.

    Fields:
        responsible: names of the people on the task (unique, ordered).
        due_date / due_time: local date and optional 'HH:MM'.
        subtasks, attachments, comments, time_entries: carried as-is.
    """
    title: str
    description: str = ''
    responsible: List[str] = field(default_factory=list)
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    priority: str = 'medium'
    status: Optional[str] = None
    subtasks: List[Dict[str, Any]] = field(default_factory=list)
    attachments: List[Dict[str, Any]] = field(default_factory=list)
    comments: List[Dict[str, Any]] = field(default_factory=list)
    time_entries: List[Dict[str, Any]] = field(default_factory=list)
    estimated_hours: Optional[float] = None
    created_by: str = ''
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        check_choice(self.priority, TASK_PRIORITIES, 'task priority')
        self.tags = unique(self.tags)
        self.responsible = unique(self.responsible)

    def __repr__(self) -> str:
        return f'<Task {self.id}: {self.title} ({self.status})>'

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    def touch(self) -> None:
        self.updated_at = utcnow()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'responsible': list(self.responsible),
            'due_date': self.due_date,
            'due_time': self.due_time,
            'tags': list(self.tags),
            'priority': self.priority,
            'status': self.status,
            'subtasks': list(self.subtasks),
            'attachments': list(self.attachments),
            'comments': list(self.comments),
            'time_entries': list(self.time_entries),
            'estimated_hours': self.estimated_hours,
            'created_by': self.created_by,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }


@dataclass
class Column:
    """A board column; owns the ordered tasks it currently holds"""
    title: str
    tasks: List[Task] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __repr__(self) -> str:
        return f'<Column {self.id}: {self.title} ({len(self.tasks)} tasks)>'

    def index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'tasks': [task.to_dict() for task in self.tasks],
        }
