from dataclasses import dataclass, field

from flask_login import UserMixin

from sparkboard.models.base import check_choice, new_id


USER_ROLES = ('ADMIN', 'MANAGER', 'USER')


@dataclass(eq=False)
class SessionUser(UserMixin):
    """The signed-in user a workspace belongs to; only the role matters to the core"""
    name: str
    email: str = ''
    role: str = 'USER'
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        check_choice(self.role, USER_ROLES, 'user role')

    def __repr__(self):
        return f'<SessionUser {self.email or self.name} ({self.role})>'
