"""
Filtering, sorting and deadline flags for board tasks
"""
from sparkboard.models.board import PRIORITY_RANK
from sparkboard.utils.timezone_utils import DEFAULT_TIMEZONE, due_datetime, is_due_soon, is_overdue


SORT_KEYS = ('due_date', 'priority', 'title', 'created')
DONE_COLUMN_ID = 'done'


def _contains(haystack, needle):
    return needle.lower() in (haystack or '').lower()


def filter_tasks(tasks, search='', priority='all', responsible='all', title='', due_date_prefix=''):
    """
    Keep tasks matching every given filter

    Args:
        search: substring of the title or description
        priority: a priority, or 'all'
        responsible: a person's name, or 'all'
        title: substring of the title only
        due_date_prefix: e.g. '2024-01' for every task due in January 2024
    """
    return [
        task for task in tasks
        if (_contains(task.title, search) or _contains(task.description, search))
        and (priority == 'all' or task.priority == priority)
        and (responsible == 'all' or responsible in task.responsible)
        and (not title or _contains(task.title, title))
        and (not due_date_prefix or (task.due_date or '').startswith(due_date_prefix))
    ]


def _sort_key(sort_by, tz_name, descending):
    if sort_by == 'due_date':
        sign = -1 if descending else 1

        # Tasks without a deadline go last in either order
        def key(task):
            deadline = due_datetime(task.due_date, task.due_time, tz_name)
            return (deadline is None, sign * deadline.timestamp() if deadline else 0)
        return key
    if sort_by == 'priority':
        return lambda task: PRIORITY_RANK.get(task.priority, 0)
    if sort_by == 'title':
        return lambda task: task.title.casefold()
    if sort_by == 'created':
        return lambda task: task.created_at
    raise ValueError(f"Invalid sort key {sort_by!r}; expected one of {', '.join(SORT_KEYS)}")


def sort_tasks(tasks, sort_by='due_date', order='asc', tz_name=DEFAULT_TIMEZONE):
    """Stable sort by due date, priority, title or creation time"""
    descending = order == 'desc'
    key = _sort_key(sort_by, tz_name, descending)
    return sorted(tasks, key=key, reverse=descending and sort_by != 'due_date')


def deadline_flags(task, now=None, due_soon_hours=24, tz_name=DEFAULT_TIMEZONE):
    """
    Overdue / due-soon flags for a task card

    Tasks sitting in the done column are never overdue.
    """
    if task.status == DONE_COLUMN_ID:
        return {'overdue': False, 'due_soon': False}

    overdue = is_overdue(task.due_date, task.due_time, now=now, tz_name=tz_name)
    due_soon = not overdue and is_due_soon(
        task.due_date, task.due_time, now=now, hours=due_soon_hours, tz_name=tz_name
    )
    return {'overdue': overdue, 'due_soon': due_soon}


def column_summary(column, now=None, tz_name=DEFAULT_TIMEZONE):
    """Urgent and overdue counts shown in a column header"""
    return {
        'total': len(column.tasks),
        'urgent': len([t for t in column.tasks if t.priority == 'urgent']),
        'overdue': len([t for t in column.tasks if deadline_flags(t, now=now, tz_name=tz_name)['overdue']]),
    }
