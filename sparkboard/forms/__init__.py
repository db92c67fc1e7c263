# Forms package
from sparkboard.forms.crm import CompanyForm, ContactForm, InteractionForm
from sparkboard.forms.projects import ColumnForm, TaskForm
