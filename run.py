import os
from dotenv import load_dotenv
from sparkboard import create_app, workspaces

# Load environment variables
load_dotenv()

# Create application
app = create_app(os.getenv('FLASK_ENV', 'development'))


@app.shell_context_processor
def make_shell_context():
    """Make the workspace registry and models available in Flask shell"""
    from sparkboard.models import Company, Contact, Interaction, Column, Task, SessionUser
    from sparkboard.services.board_service import Board
    from sparkboard.services.crm_service import CRMStore

    return {
        'workspaces': workspaces,
        'Board': Board,
        'CRMStore': CRMStore,
        'Company': Company,
        'Contact': Contact,
        'Interaction': Interaction,
        'Column': Column,
        'Task': Task,
        'SessionUser': SessionUser
    }
