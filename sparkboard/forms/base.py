from wtforms import Field, Form
from wtforms.validators import ValidationError
from wtforms.widgets import TextInput
from werkzeug.datastructures import MultiDict

from sparkboard.utils.timezone_utils import parse_date, parse_time


class TagListField(Field):
    """Multi-valued text; each value may itself be comma separated"""
    widget = TextInput()

    def process_formdata(self, valuelist):
        values = []
        for value in valuelist:
            for part in str(value).split(','):
                part = part.strip()
                if part and part not in values:
                    values.append(part)
        self.data = values

    def _value(self):
        return ', '.join(self.data or [])


def check_date(field, message="Data inválida"):
    """Inline validator body for optional ISO date text fields"""
    if field.data and parse_date(field.data) is None:
        raise ValidationError(message)


def check_time(field, message="Horário inválido"):
    if field.data and parse_time(field.data) is None:
        raise ValidationError(message)


def text(field):
    """Stripped field text; None becomes ''"""
    return (field.data or '').strip()


class SparkForm(Form):
    """Base for every form: built from raw user text, reports one message per field"""

    @classmethod
    def from_raw(cls, raw, **kwargs):
        """Build from a plain dict of raw input; list values become repeated keys"""
        formdata = MultiDict()
        for key, value in (raw or {}).items():
            if isinstance(value, (list, tuple)):
                for item in value:
                    formdata.add(key, item)
            elif value is not None:
                formdata.add(key, value)
        return cls(formdata=formdata, **kwargs)

    def error_map(self):
        """{field name: first error message}"""
        return {name: messages[0] for name, messages in self.errors.items() if messages}

    def cleaned_data(self):
        """Canonical values ready for the store; only meaningful after validate()"""
        raise NotImplementedError
