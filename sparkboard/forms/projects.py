from wtforms import DecimalField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, NumberRange, Optional, ValidationError

from sparkboard.forms.base import SparkForm, TagListField, check_date, check_time, text
from sparkboard.utils.input_validators import validate_column_title
from sparkboard.utils.timezone_utils import parse_date, parse_time


class ColumnForm(SparkForm):
    """Add/rename board column form"""
    title = StringField('Título', validators=[DataRequired(message='Título da coluna é obrigatório')])

    def validate_title(self, field):
        is_valid, result = validate_column_title(field.data)
        if not is_valid:
            raise ValidationError(result)

    def cleaned_data(self):
        return {'title': text(self.title)}


class TaskForm(SparkForm):
    """Create/edit task form"""
    title = StringField('Título', validators=[DataRequired(message='Título é obrigatório')])
    description = TextAreaField('Descrição')
    responsible = TagListField('Responsáveis')
    due_date = StringField('Data de Entrega')
    due_time = StringField('Horário')
    tags = TagListField('Tags')
    priority = SelectField('Prioridade', choices=[
        ('low', 'Baixa'),
        ('medium', 'Média'),
        ('high', 'Alta'),
        ('urgent', 'Urgente')
    ], default='medium')
    estimated_hours = DecimalField('Horas Estimadas', validators=[
        Optional(),
        NumberRange(min=0, message='Horas estimadas não podem ser negativas')
    ])

    def validate_due_date(self, field):
        check_date(field, 'Data de entrega inválida')

    def validate_due_time(self, field):
        check_time(field)

    def cleaned_data(self):
        due_date = parse_date(self.due_date.data)
        due_time = parse_time(self.due_time.data)
        return {
            'title': text(self.title),
            'description': text(self.description),
            'responsible': list(self.responsible.data or []),
            'due_date': due_date.isoformat() if due_date else None,
            'due_time': due_time.strftime('%H:%M') if due_time else None,
            'tags': list(self.tags.data or []),
            'priority': self.priority.data,
            'estimated_hours': float(self.estimated_hours.data) if self.estimated_hours.data is not None else None,
        }
