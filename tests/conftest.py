"""
Pytest configuration and fixtures for Sparkboard tests
"""
import pytest
from datetime import date
from sparkboard import create_app, workspaces
from sparkboard.models.board import Column, Task
from sparkboard.models.user import SessionUser
from sparkboard.services.board_service import Board


@pytest.fixture(scope='session')
def app():
    """Create and configure a test application instance"""
    app = create_app('testing')

    # Establish an application context
    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture
def admin_user():
    """An ADMIN session user"""
    return SessionUser(name='Ana Silva', email='ana@sparkboard.com.br', role='ADMIN')


@pytest.fixture
def regular_user():
    """A USER session user"""
    return SessionUser(name='Carlos Santos', email='carlos@sparkboard.com.br', role='USER')


@pytest.fixture
def workspace(app, admin_user):
    """Open a workspace for the admin user and close it after the test"""
    workspace = workspaces.open(admin_user)
    yield workspace
    workspaces.close(admin_user.id)


@pytest.fixture
def crm(workspace):
    """The workspace CRM store"""
    return workspace.crm


@pytest.fixture
def board():
    """A two column board: A holds t1 and t2, B is empty"""
    t1 = Task(title='Criar wireframes', id='t1')
    t2 = Task(title='Pesquisa de palavras-chave', id='t2')
    column_a = Column(title='A', id='A')
    column_b = Column(title='B', id='B')
    board = Board([column_a, column_b])
    board.add_task(t2, 'A')
    board.add_task(t1, 'A')
    return board


@pytest.fixture
def acme(crm):
    """A company with one contact"""
    company = crm.create_company({
        'name': 'Acme Ltda',
        'email': 'contato@acme.com.br',
        'phone': '1133334444',
        'industry': 'Tecnologia',
        'status': 'active'
    })
    crm.create_contact({
        'name': 'João Souza',
        'email': 'joao@acme.com.br',
        'phone': '11987654321',
        'company': 'Acme Ltda',
        'position': 'CTO',
        'tags': ['VIP', 'Decisor'],
        'last_contact': date(2024, 1, 10)
    })
    return company
