"""Board logic: ordered columns, per-column task order, and task transfers.

Column operations never drop tasks implicitly. The only way tasks leave the
board through a column operation is delete_column on a non-empty column,
and that needs the caller's confirmation.

Precondition failures (blank titles, unknown ids, no drop destination) are
no-ops: the method returns False/None and the board is unchanged.
"""
import logging
from typing import Callable, Dict, Iterable, List, Mapping, Any, Optional, Tuple

from sparkboard.models.board import TASK_PRIORITIES, Column, Task
from sparkboard.models.base import check_choice
from sparkboard.utils.input_validators import validate_column_title


logger = logging.getLogger(__name__)

# (id, title) of the columns a new board starts with
DEFAULT_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ('todo', 'A Fazer'),
    ('inprogress', 'Em Progresso'),
    ('review', 'Revisão'),
    ('done', 'Concluído'),
)

PROTECTED_TASK_FIELDS = frozenset({'id', 'created_at', 'status'})

ConfirmDelete = Callable[[Column, int], bool]


class Board:
    def __init__(self, columns: Optional[Iterable[Column]] = None):
        self.columns: List[Column] = list(columns or [])

    @classmethod
    def with_default_columns(cls) -> 'Board':
        return cls(Column(id=column_id, title=title) for column_id, title in DEFAULT_COLUMNS)

    def __repr__(self) -> str:
        return f'<Board columns={len(self.columns)} tasks={self.task_count()}>'

    # -------------------- queries --------------------
    def get_column(self, column_id: str) -> Optional[Column]:
        return next((c for c in self.columns if c.id == column_id), None)

    def column_index(self, column_id: str) -> Optional[int]:
        for index, column in enumerate(self.columns):
            if column.id == column_id:
                return index
        return None

    def all_tasks(self) -> List[Task]:
        return [task for column in self.columns for task in column.tasks]

    def task_count(self) -> int:
        return sum(len(column.tasks) for column in self.columns)

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.all_tasks() if t.id == task_id), None)

    def column_of(self, task_id: str) -> Optional[Column]:
        for column in self.columns:
            if column.index_of(task_id) is not None:
                return column
        return None

    def responsibles(self) -> List[str]:
        """Everyone responsible for at least one task, first-seen order"""
        names: Dict[str, None] = {}
        for task in self.all_tasks():
            for name in task.responsible:
                names.setdefault(name, None)
        return list(names)

    # -------------------- column operations --------------------
    def add_column(self, title: str) -> Optional[Column]:
        """Append a new empty column; None when the title is blank"""
        is_valid, result = validate_column_title(title)
        if not is_valid:
            logger.debug("add_column rejected: %s", result)
            return None

        column = Column(title=result)
        self.columns.append(column)
        logger.debug("Added %r", column)
        return column

    def rename_column(self, column_id: str, title: str) -> bool:
        """Retitle a column in place, keeping its position and tasks"""
        column = self.get_column(column_id)
        is_valid, result = validate_column_title(title)
        if column is None or not is_valid:
            logger.debug("rename_column %s rejected", column_id)
            return False

        column.title = result
        return True

    def delete_column(self, column_id: str, confirm: Optional[ConfirmDelete] = None) -> bool:
        """
        Remove a column.

        A column still holding tasks is only removed when confirm(column,
        task_count) returns True; its tasks leave the board with it. Without a
        callback, or when it declines, nothing changes.
        """
        column = self.get_column(column_id)
        if column is None:
            return False

        affected = len(column.tasks)
        if affected:
            if confirm is None or not confirm(column, affected):
                logger.debug("delete_column %s not confirmed (%d tasks)", column_id, affected)
                return False

        self.columns = [c for c in self.columns if c.id != column_id]
        logger.info("Deleted column %r with %d task(s)", column.title, affected)
        return True

    def reorder_columns(self, from_index: int, to_index: Optional[int]) -> bool:
        """
        Move one column: take it out at from_index, reinsert at to_index.

        to_index None means the drag ended without a drop target.
        """
        if to_index is None:
            return False

        size = len(self.columns)
        if not (0 <= from_index < size and 0 <= to_index < size):
            logger.debug("reorder_columns out of range: %s -> %s", from_index, to_index)
            return False

        column = self.columns.pop(from_index)
        self.columns.insert(to_index, column)
        return True

    # -------------------- task operations --------------------
    def add_task(self, task: Task, column_id: Optional[str] = None) -> Optional[Task]:
        """Put a new task at the top of a column (the first column by default)"""
        if column_id is None:
            column = self.columns[0] if self.columns else None
        else:
            column = self.get_column(column_id)

        if column is None:
            logger.debug("add_task: no column %s", column_id)
            return None

        if self.find_task(task.id) is not None:
            logger.debug("add_task: %r already on the board", task)
            return None

        task.status = column.id
        column.tasks.insert(0, task)
        logger.debug("Added %r to %r", task, column)
        return task

    def move_task(self, task_id: str, dest_column_id: Optional[str], dest_index: Optional[int]) -> bool:
        """
        Transfer a task to dest_index within dest_column_id.

        The task leaves its source column and is inserted in the destination,
        so it is only ever held by one column. An index past the end appends.
        """
        if dest_column_id is None or dest_index is None:
            return False

        source = self.column_of(task_id)
        dest = self.get_column(dest_column_id)
        if source is None or dest is None or dest_index < 0:
            return False

        source_index = source.index_of(task_id)
        if source is dest and source_index == dest_index:
            return False

        task = source.tasks.pop(source_index)
        dest.tasks.insert(dest_index, task)
        task.status = dest.id
        task.touch()
        logger.debug("Moved %r from %s to %s[%d]", task, source.id, dest.id, dest_index)
        return True

    def update_task(self, task_id: str, partial: Mapping[str, Any]) -> Optional[Task]:
        """Merge fields into a task; its id, creation time and column are kept"""
        task = self.find_task(task_id)
        if task is None:
            return None

        if 'priority' in partial:
            check_choice(partial['priority'], TASK_PRIORITIES, 'task priority')

        partial = dict(partial)
        tags = partial.pop('tags', None)
        responsible = partial.pop('responsible', None)

        allowed = Task.field_names() - PROTECTED_TASK_FIELDS
        for key, value in partial.items():
            if key in allowed:
                setattr(task, key, value)

        if tags is not None:
            task.tags = []
            for tag in tags:
                task.add_tag(tag)
        if responsible is not None:
            task.responsible = list(dict.fromkeys(responsible))

        task.touch()
        return task

    def remove_task(self, task_id: str) -> bool:
        column = self.column_of(task_id)
        if column is None:
            return False
        column.tasks.pop(column.index_of(task_id))
        return True

    def add_task_tag(self, task_id: str, tag: str) -> bool:
        task = self.find_task(task_id)
        return task.add_tag(tag) if task else False

    def remove_task_tag(self, task_id: str, tag: str) -> bool:
        task = self.find_task(task_id)
        return task.remove_tag(tag) if task else False

    # -------------------- serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        return {'columns': [column.to_dict() for column in self.columns]}

    def __str__(self) -> str:
        return ', '.join(f'{c.title}: {len(c.tasks)} tasks' for c in self.columns)
