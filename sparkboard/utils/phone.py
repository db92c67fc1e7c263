"""
Brazilian phone number normalization, masking and validation.

Canonical form is digits only ("11987654321"). The display mask is
"(DD) DDDD-DDDD" for landlines and "(DD) DDDDD-DDDD" for mobiles.
"""
import re
import phonenumbers


MAX_DIGITS = 11
LANDLINE_DIGITS = 10
MOBILE_DIGITS = 11

_NON_DIGIT = re.compile(r'\D')


def clean(text):
    """Strip every non-digit character"""
    if not text:
        return ''
    return _NON_DIGIT.sub('', str(text))


def format_phone(text):
    """
    Format a phone number for display.

    Layout depends only on how many digits there are:
        0      -> ''
        1-2    -> '(DD'
        3-6    -> '(DD) DDDD'
        7-10   -> '(DD) DDDD-DDDD'
        11+    -> '(DD) DDDDD-DDDD'
    """
    digits = clean(text)

    if not digits:
        return ''

    if len(digits) <= 2:
        return f'({digits}'

    if len(digits) <= 6:
        return f'({digits[:2]}) {digits[2:]}'

    if len(digits) <= 10:
        return f'({digits[:2]}) {digits[2:6]}-{digits[6:]}'

    # Mobile numbers carry a 5 digit prefix
    return f'({digits[:2]}) {digits[2:7]}-{digits[7:11]}'


def mask(text):
    """Mask input as the user types; never holds more than 11 digits"""
    return format_phone(clean(text)[:MAX_DIGITS])


def is_valid(text):
    """
    Validate a Brazilian phone number.

    Landlines have 10 digits and the third is not 9.
    Mobiles have 11 digits and the third is 9.
    """
    digits = clean(text)

    if len(digits) == LANDLINE_DIGITS:
        return digits[2] != '9'

    if len(digits) == MOBILE_DIGITS:
        return digits[2] == '9'

    return False


def to_e164(text, region='BR'):
    """
    Convert a valid national number to E.164 (e.g. +5511987654321).

    Returns None when the number fails local validation or phonenumbers
    does not consider it a possible number for the region.
    """
    if not is_valid(text):
        return None

    try:
        parsed = phonenumbers.parse(clean(text), region)
    except phonenumbers.NumberParseException:
        return None

    if not phonenumbers.is_possible_number(parsed):
        return None

    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
