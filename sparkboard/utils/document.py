"""
CPF and CNPJ (Brazilian tax id) masking and validation
"""
import re


CPF_DIGITS = 11
CNPJ_DIGITS = 14

CNPJ_WEIGHTS_FIRST = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_WEIGHTS_SECOND = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)

_NON_DIGIT = re.compile(r'\D')


def clean(text):
    """Strip every non-digit character"""
    if not text:
        return ''
    return _NON_DIGIT.sub('', str(text))


def mask_cpf(text):
    """000.000.000-00"""
    digits = clean(text)

    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f'{digits[:3]}.{digits[3:]}'
    if len(digits) <= 9:
        return f'{digits[:3]}.{digits[3:6]}.{digits[6:]}'
    return f'{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:11]}'


def mask_cnpj(text):
    """00.000.000/0000-00"""
    digits = clean(text)

    if len(digits) <= 2:
        return digits
    if len(digits) <= 5:
        return f'{digits[:2]}.{digits[2:]}'
    if len(digits) <= 8:
        return f'{digits[:2]}.{digits[2:5]}.{digits[5:]}'
    if len(digits) <= 12:
        return f'{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:]}'
    return f'{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:14]}'


def mask(text):
    """CPF mask up to 11 digits, CNPJ mask beyond"""
    if len(clean(text)) <= CPF_DIGITS:
        return mask_cpf(text)
    return mask_cnpj(text)


def _all_same(digits):
    return len(set(digits)) == 1


def _cpf_check_digit(digits, length):
    total = sum(int(digits[i]) * (length + 1 - i) for i in range(length))
    remainder = (total * 10) % 11
    return 0 if remainder == 10 else remainder


def is_valid_cpf(text):
    """Official CPF check digit algorithm"""
    digits = clean(text)

    if len(digits) != CPF_DIGITS or _all_same(digits):
        return False

    if _cpf_check_digit(digits, 9) != int(digits[9]):
        return False

    return _cpf_check_digit(digits, 10) == int(digits[10])


def _cnpj_check_digit(digits, weights):
    remainder = sum(int(d) * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cnpj(text):
    """Official CNPJ check digit algorithm"""
    digits = clean(text)

    if len(digits) != CNPJ_DIGITS or _all_same(digits):
        return False

    if _cnpj_check_digit(digits, CNPJ_WEIGHTS_FIRST) != int(digits[12]):
        return False

    return _cnpj_check_digit(digits, CNPJ_WEIGHTS_SECOND) == int(digits[13])


def document_type(text):
    """'cpf', 'cnpj' or 'invalid', judged by digit count only"""
    length = len(clean(text))
    if length == CPF_DIGITS:
        return 'cpf'
    if length == CNPJ_DIGITS:
        return 'cnpj'
    return 'invalid'


def is_valid(text):
    """Validate as CPF or CNPJ depending on length"""
    kind = document_type(text)
    if kind == 'cpf':
        return is_valid_cpf(text)
    if kind == 'cnpj':
        return is_valid_cnpj(text)
    return False


def format_document(text):
    """Mask complete documents; anything else is returned unchanged"""
    kind = document_type(text)
    if kind == 'cpf':
        return mask_cpf(text)
    if kind == 'cnpj':
        return mask_cnpj(text)
    return text
