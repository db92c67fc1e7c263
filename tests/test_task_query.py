"""
Tests for task filtering, sorting and deadline flags
"""
import pytest
from datetime import datetime, timedelta
import pytz
from sparkboard.models.board import Column, Task
from sparkboard.services.task_query import column_summary, deadline_flags, filter_tasks, sort_tasks


# 09:00 in Sao Paulo
NOW = pytz.UTC.localize(datetime(2024, 1, 15, 12, 0, 0))


@pytest.fixture
def tasks():
    base = pytz.UTC.localize(datetime(2024, 1, 1))
    return [
        Task(title='Pesquisa de palavras-chave', description='SEO para o blog', priority='high',
             responsible=['Ana'], due_date='2024-01-20', id='seo', created_at=base),
        Task(title='Criar wireframes', description='Tela de login', priority='urgent',
             responsible=['Carlos', 'Ana'], due_date='2024-01-14', id='ux',
             created_at=base + timedelta(days=1)),
        Task(title='atualizar dependências', priority='low', id='deps',
             created_at=base + timedelta(days=2)),
        Task(title='Relatório mensal', description='Enviar ao cliente', priority='medium',
             responsible=['Maria'], due_date='2024-02-01', due_time='10:00', id='report',
             created_at=base + timedelta(days=3)),
    ]


def _ids(tasks):
    return [t.id for t in tasks]


class TestFilterTasks:
    """Test suite for filter_tasks"""

    def test_no_filters(self, tasks):
        """Test that default filters keep everything"""
        assert _ids(filter_tasks(tasks)) == ['seo', 'ux', 'deps', 'report']

    def test_search_title_or_description(self, tasks):
        """Test case-insensitive search in title and description"""
        assert _ids(filter_tasks(tasks, search='login')) == ['ux']
        assert _ids(filter_tasks(tasks, search='RELATÓRIO')) == ['report']

    def test_priority_and_responsible(self, tasks):
        """Test exact filters"""
        assert _ids(filter_tasks(tasks, priority='urgent')) == ['ux']
        assert _ids(filter_tasks(tasks, responsible='Ana')) == ['seo', 'ux']
        assert _ids(filter_tasks(tasks, priority='high', responsible='Carlos')) == []

    def test_title_and_due_month(self, tasks):
        """Test the title-only and due date prefix filters"""
        assert _ids(filter_tasks(tasks, title='blog')) == []
        assert _ids(filter_tasks(tasks, due_date_prefix='2024-01')) == ['seo', 'ux']


class TestSortTasks:
    """Test suite for sort_tasks"""

    def test_due_date_ascending_puts_undated_last(self, tasks):
        """Test deadline order"""
        assert _ids(sort_tasks(tasks)) == ['ux', 'seo', 'report', 'deps']

    def test_due_date_descending_keeps_undated_last(self, tasks):
        """Test reverse deadline order"""
        assert _ids(sort_tasks(tasks, order='desc')) == ['report', 'seo', 'ux', 'deps']

    def test_priority(self, tasks):
        """Test priority rank order"""
        assert _ids(sort_tasks(tasks, 'priority', 'desc')) == ['ux', 'seo', 'report', 'deps']

    def test_title_ignores_case(self, tasks):
        """Test alphabetical order"""
        assert _ids(sort_tasks(tasks, 'title')) == ['deps', 'ux', 'seo', 'report']

    def test_created(self, tasks):
        """Test creation order"""
        assert _ids(sort_tasks(tasks, 'created', 'desc')) == ['report', 'deps', 'ux', 'seo']

    def test_unknown_sort_key(self, tasks):
        """Test that an unknown key raises"""
        with pytest.raises(ValueError):
            sort_tasks(tasks, 'responsible')


class TestDeadlineFlags:
    """Test suite for overdue and due-soon flags"""

    def test_past_day_is_overdue(self):
        """Test a deadline at the end of yesterday"""
        task = Task(title='x', due_date='2024-01-14', status='todo')
        assert deadline_flags(task, now=NOW) == {'overdue': True, 'due_soon': False}

    def test_end_of_today_is_due_soon(self):
        """Test that a date without time is due at the end of the local day"""
        task = Task(title='x', due_date='2024-01-15', status='todo')
        assert deadline_flags(task, now=NOW) == {'overdue': False, 'due_soon': True}

    def test_due_time_is_local(self):
        """Test that 08:00 local has passed at 09:00 local"""
        task = Task(title='x', due_date='2024-01-15', due_time='08:00', status='todo')
        assert deadline_flags(task, now=NOW)['overdue'] is True

        task = Task(title='x', due_date='2024-01-15', due_time='10:00', status='todo')
        assert deadline_flags(task, now=NOW) == {'overdue': False, 'due_soon': True}

    def test_far_deadline(self):
        """Test a deadline beyond the due-soon window"""
        task = Task(title='x', due_date='2024-01-20', status='todo')
        assert deadline_flags(task, now=NOW) == {'overdue': False, 'due_soon': False}

    def test_no_deadline(self):
        """Test tasks without a due date"""
        task = Task(title='x', status='todo')
        assert deadline_flags(task, now=NOW) == {'overdue': False, 'due_soon': False}

    def test_done_is_never_overdue(self):
        """Test that finished tasks are not flagged"""
        task = Task(title='x', due_date='2023-12-01', status='done')
        assert deadline_flags(task, now=NOW) == {'overdue': False, 'due_soon': False}

    def test_column_summary(self, tasks):
        """Test header counts for a column"""
        column = Column(title='A Fazer', id='todo', tasks=tasks)
        for task in tasks:
            task.status = 'todo'

        assert column_summary(column, now=NOW) == {'total': 4, 'urgent': 1, 'overdue': 1}
