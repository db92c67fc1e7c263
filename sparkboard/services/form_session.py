"""
Form session: the lifecycle of one create/edit dialog

    EDITING --validate--> VALIDATING --> EDITING
    EDITING --submit--> VALIDATING --errors--> EDITING
                                   --ok--> SUBMITTING --> CLOSED
                                                      --handler fails--> EDITING
    EDITING --cancel--> CLOSED

on_submit only ever sees fully validated, canonical data, so a session that
is cancelled or fails validation has written nothing.
"""
import logging
from enum import Enum


logger = logging.getLogger(__name__)

FORM_ERROR_KEY = '__all__'


class FormState(Enum):
    EDITING = 'editing'
    VALIDATING = 'validating'
    SUBMITTING = 'submitting'
    CLOSED = 'closed'


class FormStateError(Exception):
    """An event arrived in a state that does not accept it"""


class FormSession:
    """Drive a SparkForm through validate / submit / cancel"""

    def __init__(self, form, on_submit):
        self.form = form
        self.on_submit = on_submit
        self.state = FormState.EDITING
        self.errors = {}
        self.result = None

    def __repr__(self):
        return f'<FormSession {type(self.form).__name__} {self.state.value}>'

    def _require(self, *states):
        if self.state not in states:
            raise FormStateError(f'{type(self.form).__name__} session is {self.state.value}')

    def validate(self):
        """
        Run field validation without submitting
        Returns: {field name: message}, empty when the form is valid
        """
        self._require(FormState.EDITING)
        self.state = FormState.VALIDATING
        try:
            self.form.validate()
            self.errors = self.form.error_map()
        finally:
            self.state = FormState.EDITING
        return self.errors

    def submit(self):
        """
        Validate and, when clean, hand canonical data to on_submit
        Returns: (success, result or error map)
        """
        errors = self.validate()
        if errors:
            return False, errors

        self.state = FormState.SUBMITTING
        try:
            self.result = self.on_submit(self.form.cleaned_data())
        except Exception as e:
            logger.exception("Error submitting %s", type(self.form).__name__)
            self.state = FormState.EDITING
            self.errors = {FORM_ERROR_KEY: str(e) or 'Erro ao salvar'}
            return False, self.errors

        self.state = FormState.CLOSED
        return True, self.result

    def cancel(self):
        """Close without writing anything"""
        self._require(FormState.EDITING)
        self.state = FormState.CLOSED

    @property
    def is_closed(self):
        return self.state is FormState.CLOSED
