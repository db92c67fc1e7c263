"""
Session-scoped workspaces

A workspace holds the CRM collection and the project board for one signed-in
user. It is created when the session opens, mutated only through CRMStore and
Board, and discarded when the session closes.
"""
import logging

from sparkboard.services.board_service import Board
from sparkboard.services.crm_service import CRMStore
from sparkboard.services import task_query
from sparkboard.utils import phone as phone_utils
from sparkboard.utils.timezone_utils import DEFAULT_TIMEZONE


logger = logging.getLogger(__name__)


class Workspace:
    """Everything one user session works on"""

    def __init__(self, user, board=None, crm=None, tz_name=DEFAULT_TIMEZONE,
                 due_soon_hours=24, phone_region='BR'):
        self.user = user
        self.board = board if board is not None else Board()
        self.crm = crm if crm is not None else CRMStore()
        self.tz_name = tz_name
        self.due_soon_hours = due_soon_hours
        self.phone_region = phone_region

    def __repr__(self):
        return f'<Workspace {self.user!r} {self.board!r} {self.crm!r}>'

    def deadline_flags(self, task, now=None):
        return task_query.deadline_flags(task, now=now, due_soon_hours=self.due_soon_hours,
                                         tz_name=self.tz_name)

    def column_summary(self, column_id, now=None):
        """Header counts for one column; None when the column is unknown"""
        column = self.board.get_column(column_id)
        if column is None:
            return None
        return task_query.column_summary(column, now=now, tz_name=self.tz_name)

    def contact_e164(self, contact):
        """A contact's phone in international form, for dialers and messaging links"""
        return phone_utils.to_e164(contact.phone, self.phone_region)


class WorkspaceRegistry:
    """Flask extension tracking the open workspace of each signed-in user"""

    def __init__(self, app=None):
        self._workspaces = {}
        self.settings = {}
        self.default_columns = True
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.default_columns = app.config.get('DEFAULT_BOARD_COLUMNS', True)
        self.settings = {
            'tz_name': app.config.get('BOARD_TIMEZONE', DEFAULT_TIMEZONE),
            'due_soon_hours': app.config.get('DUE_SOON_HOURS', 24),
            'phone_region': app.config.get('DEFAULT_PHONE_REGION', 'BR'),
        }
        app.extensions['sparkboard.workspaces'] = self

    def open(self, user):
        """
        Start a session for user

        Returns the existing workspace when the session is already open.
        """
        key = str(user.id)
        workspace = self._workspaces.get(key)
        if workspace is not None:
            return workspace

        board = Board.with_default_columns() if self.default_columns else Board()
        workspace = Workspace(user, board=board, **self.settings)
        self._workspaces[key] = workspace
        logger.info("Opened workspace for %r", user)
        return workspace

    def get(self, user_id):
        return self._workspaces.get(str(user_id))

    def user_for(self, user_id):
        workspace = self.get(user_id)
        return workspace.user if workspace else None

    def close(self, user_id):
        """Discard a session's workspace; unknown sessions are ignored"""
        workspace = self._workspaces.pop(str(user_id), None)
        if workspace is None:
            return False
        logger.info("Closed workspace for %r", workspace.user)
        return True

    def __len__(self):
        return len(self._workspaces)
