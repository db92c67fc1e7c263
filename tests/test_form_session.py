"""
Tests for the form session state machine
"""
import logging
import pytest
from sparkboard.forms import CompanyForm, InteractionForm
from sparkboard.services.form_session import FORM_ERROR_KEY, FormSession, FormState, FormStateError


VALID_COMPANY = {
    'name': 'Marketing Pro',
    'email': 'contato@marketingpro.com.br',
    'phone': '(21) 3333-4444',
    'industry': 'Marketing'
}


class TestFormSession:
    """Test suite for validate / submit / cancel"""

    def test_validate_returns_to_editing(self):
        """Test that validation alone never submits"""
        calls = []
        session = FormSession(CompanyForm.from_raw({}), calls.append)

        errors = session.validate()

        assert 'name' in errors
        assert session.state is FormState.EDITING
        assert calls == []

    def test_submit_with_errors_writes_nothing(self, crm):
        """Test that an invalid form never reaches the store"""
        session = FormSession(CompanyForm.from_raw({'name': 'Marketing Pro'}), crm.create_company)

        success, errors = session.submit()

        assert success is False
        assert errors['email'] == 'E-mail é obrigatório'
        assert session.state is FormState.EDITING
        assert crm.companies == []

    def test_submit_creates_company(self, crm):
        """Test the full path from raw input to the store"""
        session = FormSession(CompanyForm.from_raw(VALID_COMPANY), crm.create_company)

        success, company = session.submit()

        assert success is True
        assert session.is_closed
        assert crm.companies == [company]
        assert company.phone == '2133334444'

    def test_closed_session_rejects_events(self, crm):
        """Test that a closed session accepts nothing"""
        session = FormSession(CompanyForm.from_raw(VALID_COMPANY), crm.create_company)
        session.submit()

        with pytest.raises(FormStateError):
            session.submit()
        with pytest.raises(FormStateError):
            session.cancel()

        assert len(crm.companies) == 1

    def test_cancel(self):
        """Test that cancel closes without submitting"""
        calls = []
        session = FormSession(CompanyForm.from_raw(VALID_COMPANY), calls.append)

        session.cancel()

        assert session.is_closed
        assert calls == []

    def test_resubmit_after_fixing_errors(self, crm):
        """Test that a session stays usable after a failed validation"""
        form = CompanyForm.from_raw(dict(VALID_COMPANY, email='contato@'))
        session = FormSession(form, crm.create_company)
        assert session.submit()[0] is False

        form.email.data = 'contato@marketingpro.com.br'
        success, company = session.submit()

        assert success is True
        assert company.email == 'contato@marketingpro.com.br'

    def test_handler_failure_returns_to_editing(self, caplog):
        """Test that a failing on_submit is logged and reported under __all__"""
        def fail(data):
            raise RuntimeError('Falha ao salvar')

        session = FormSession(CompanyForm.from_raw(VALID_COMPANY), fail)

        with caplog.at_level(logging.ERROR, logger='sparkboard.services.form_session'):
            success, errors = session.submit()

        assert success is False
        assert errors == {FORM_ERROR_KEY: 'Falha ao salvar'}
        assert session.state is FormState.EDITING
        assert 'Error submitting CompanyForm' in caplog.text

    def test_validation_error_returns_to_editing(self, monkeypatch):
        """Test that a validator raising leaves the session usable"""
        form = CompanyForm.from_raw(VALID_COMPANY)
        session = FormSession(form, lambda data: data)

        def broken_validate(*args, **kwargs):
            raise RuntimeError('validator crashed')

        monkeypatch.setattr(form, 'validate', broken_validate)
        with pytest.raises(RuntimeError):
            session.validate()

        assert session.state is FormState.EDITING
        monkeypatch.undo()
        success, data = session.submit()
        assert success is True
        assert data['name'] == 'Marketing Pro'

    def test_interaction_for_existing_contact(self, crm, acme):
        """Test logging an interaction through a session"""
        contact = crm.contacts[0]
        form = InteractionForm.from_raw({
            'contact_id': contact.id,
            'subject': 'Follow-up',
            'description': 'Ligação de acompanhamento',
            'date': '2024-01-20',
            'outcome': 'positive'
        }, contact_ids=[c.id for c in crm.contacts])

        success, interaction = FormSession(form, crm.create_interaction).submit()

        assert success is True
        assert interaction.contact_name == 'João Souza'
        assert crm.interactions_for_contact(contact.id) == [interaction]
