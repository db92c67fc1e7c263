"""
Input validation and sanitization utilities

Every validator returns (is_valid, value_or_error_message). On success the
second element is the canonical value to store.
"""
from sparkboard.utils import document, email as email_utils, phone as phone_utils


MAX_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 255
MAX_TITLE_LENGTH = 100


def validate_required(value, message):
    """
    Validate that a text field is not blank
    Returns: (is_valid, stripped value or error_message)
    """
    if value is None:
        return False, message

    value_str = str(value).strip()
    if not value_str:
        return False, message

    return True, value_str


def validate_email(email, required=True):
    """
    Validate email format
    Returns: (is_valid, normalized email or error_message)
    """
    if not email or not str(email).strip():
        if required:
            return False, "E-mail é obrigatório"
        return True, ''

    email_str = email_utils.normalize(email)

    if len(email_str) > MAX_EMAIL_LENGTH:
        return False, f"E-mail muito longo (máximo {MAX_EMAIL_LENGTH} caracteres)"

    if not email_utils.is_valid(email_str):
        return False, "E-mail inválido"

    return True, email_str


def validate_phone(phone, required=True, strict=False):
    """
    Validate a phone field
    Forms only require a phone to be present; strict=True also checks the
    landline/mobile digit rules.
    Returns: (is_valid, digits or error_message)
    """
    digits = phone_utils.clean(phone)

    if not digits:
        if required:
            return False, "Telefone é obrigatório"
        return True, ''

    if strict and not phone_utils.is_valid(digits):
        return False, "Telefone inválido"

    return True, digits


def validate_document(value, required=False):
    """
    Validate a CPF or CNPJ
    Returns: (is_valid, digits or error_message)
    """
    digits = document.clean(value)

    if not digits:
        if required:
            return False, "Documento é obrigatório"
        return True, ''

    if not document.is_valid(digits):
        return False, "CPF/CNPJ inválido"

    return True, digits


def validate_column_title(title):
    """
    Validate a board column title
    Returns: (is_valid, stripped title or error_message)
    """
    is_valid, result = validate_required(title, "Título da coluna é obrigatório")
    if not is_valid:
        return False, result

    if len(result) > MAX_TITLE_LENGTH:
        return False, f"Título muito longo (máximo {MAX_TITLE_LENGTH} caracteres)"

    return True, result


def sanitize_tag(tag):
    """
    Clean a tag before adding it
    Returns: stripped tag, or '' when nothing usable remains
    """
    if not tag:
        return ''
    return str(tag).strip()
