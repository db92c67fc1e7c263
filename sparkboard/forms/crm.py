from wtforms import IntegerField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, NumberRange, Optional, ValidationError

from sparkboard.forms.base import SparkForm, TagListField, check_date, text
from sparkboard.models.company import COMPANY_SIZES
from sparkboard.utils import email as email_utils, phone as phone_utils
from sparkboard.utils.input_validators import validate_email, validate_phone
from sparkboard.utils.timezone_utils import parse_date


def _check_email(field):
    is_valid, result = validate_email(field.data)
    if not is_valid:
        raise ValidationError(result)


def _check_phone(field):
    is_valid, result = validate_phone(field.data)
    if not is_valid:
        raise ValidationError(result)


class CompanyForm(SparkForm):
    """Create/edit company form"""
    name = StringField('Nome da Empresa', validators=[DataRequired(message='Nome da empresa é obrigatório')])
    email = StringField('E-mail', validators=[DataRequired(message='E-mail é obrigatório')])
    phone = StringField('Telefone', validators=[DataRequired(message='Telefone é obrigatório')])
    website = StringField('Website')
    address = TextAreaField('Endereço')
    industry = StringField('Setor', validators=[DataRequired(message='Setor é obrigatório')])
    size = SelectField('Tamanho da Empresa', choices=[('', 'Não informado')] + [(s, s) for s in COMPANY_SIZES],
                       default='')
    status = SelectField('Status', choices=[
        ('prospect', 'Prospect'),
        ('active', 'Ativo'),
        ('inactive', 'Inativo')
    ], default='prospect')

    def validate_email(self, field):
        _check_email(field)

    def validate_phone(self, field):
        _check_phone(field)

    def cleaned_data(self):
        return {
            'name': text(self.name),
            'email': email_utils.normalize(self.email.data),
            'phone': phone_utils.clean(self.phone.data),
            'website': text(self.website),
            'address': text(self.address),
            'industry': text(self.industry),
            'size': self.size.data or '',
            'status': self.status.data,
        }


class ContactForm(SparkForm):
    """Create/edit contact form"""
    name = StringField('Nome', validators=[DataRequired(message='Nome é obrigatório')])
    email = StringField('E-mail', validators=[DataRequired(message='E-mail é obrigatório')])
    phone = StringField('Telefone', validators=[DataRequired(message='Telefone é obrigatório')])
    company = StringField('Empresa', validators=[DataRequired(message='Empresa é obrigatória')])
    position = StringField('Cargo', validators=[DataRequired(message='Cargo é obrigatório')])
    status = SelectField('Status', choices=[
        ('lead', 'Lead'),
        ('prospect', 'Prospect'),
        ('customer', 'Cliente'),
        ('inactive', 'Inativo')
    ], default='lead')
    last_contact = StringField('Último Contato')
    tags = TagListField('Tags')
    source = StringField('Origem')
    notes = TextAreaField('Observações')

    def validate_email(self, field):
        _check_email(field)

    def validate_phone(self, field):
        _check_phone(field)

    def validate_last_contact(self, field):
        check_date(field)

    def cleaned_data(self):
        return {
            'name': text(self.name),
            'email': email_utils.normalize(self.email.data),
            'phone': phone_utils.clean(self.phone.data),
            'company': text(self.company),
            'position': text(self.position),
            'status': self.status.data,
            'last_contact': parse_date(self.last_contact.data),
            'tags': list(self.tags.data or []),
            'source': text(self.source),
            'notes': text(self.notes),
        }


class InteractionForm(SparkForm):
    """Log/edit interaction form"""
    contact_id = StringField('Contato', validators=[DataRequired(message='Contato é obrigatório')])
    type = SelectField('Tipo', choices=[
        ('call', 'Ligação'),
        ('email', 'E-mail'),
        ('meeting', 'Reunião'),
        ('note', 'Anotação')
    ], default='call')
    subject = StringField('Assunto', validators=[DataRequired(message='Assunto é obrigatório')])
    description = TextAreaField('Descrição', validators=[DataRequired(message='Descrição é obrigatória')])
    date = StringField('Data', validators=[DataRequired(message='Data é obrigatória')])
    duration = IntegerField('Duração (minutos)', validators=[
        Optional(),
        NumberRange(min=0, message='Duração não pode ser negativa')
    ])
    outcome = SelectField('Resultado', choices=[
        ('positive', 'Positivo'),
        ('neutral', 'Neutro'),
        ('negative', 'Negativo')
    ], default='neutral')
    follow_up = StringField('Follow-up')

    def __init__(self, *args, contact_ids=None, **kwargs):
        # When given, contact_id must be one of these
        self.contact_ids = set(contact_ids) if contact_ids is not None else None
        super().__init__(*args, **kwargs)

    def validate_contact_id(self, field):
        if self.contact_ids is not None and field.data.strip() not in self.contact_ids:
            raise ValidationError('Contato não encontrado')

    def validate_date(self, field):
        check_date(field, 'Data inválida')

    def validate_follow_up(self, field):
        check_date(field, 'Data de follow-up inválida')

    def cleaned_data(self):
        return {
            'contact_id': text(self.contact_id),
            'type': self.type.data,
            'subject': text(self.subject),
            'description': text(self.description),
            'date': parse_date(self.date.data),
            'duration': self.duration.data,
            'outcome': self.outcome.data,
            'follow_up': parse_date(self.follow_up.data),
        }
