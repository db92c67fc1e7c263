# Models package
from sparkboard.models.company import Company
from sparkboard.models.contact import Contact
from sparkboard.models.interaction import Interaction
from sparkboard.models.board import Column, Task
from sparkboard.models.user import SessionUser
