"""
Brazilian Real (R$) formatting, parsing and keypad-style input masking.

None of these functions raise: bad input degrades to a zero value string
("R$ 0,00") or to 0.0.
"""
import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext


logger = logging.getLogger(__name__)

SYMBOL = 'R$'
DEFAULT_FRACTION_DIGITS = 2
MAX_FRACTION_DIGITS = 20

_NON_CURRENCY = re.compile(r'[^\d,-]')
_NON_DIGIT = re.compile(r'\D')
_LEADING_FLOAT = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def _zero(show_symbol):
    return f'{SYMBOL} 0,00' if show_symbol else '0,00'


def _leading_float(text):
    """Parse the longest numeric prefix of text; NaN when there is none"""
    match = _LEADING_FLOAT.match(text)
    if not match:
        return math.nan
    return float(match.group(0))


def _strip_to_number_text(text):
    """'R$ 1.234,56' -> '1234.56' (only the first comma becomes a period)"""
    return _NON_CURRENCY.sub('', text).replace(',', '.', 1)


def _clamp_fraction_digits(value):
    try:
        digits = int(value)
    except (TypeError, ValueError):
        return DEFAULT_FRACTION_DIGITS
    return max(0, min(MAX_FRACTION_DIGITS, digits))


def _to_number(value):
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        return _leading_float(_strip_to_number_text(value))
    if isinstance(value, (int, float, Decimal)):
        return value
    return math.nan


def _group_thousands(integer_digits):
    groups = []
    while len(integer_digits) > 3:
        groups.insert(0, integer_digits[-3:])
        integer_digits = integer_digits[:-3]
    groups.insert(0, integer_digits)
    return '.'.join(groups)


def _format_number(number, min_digits, max_digits):
    if min_digits > max_digits:
        raise ValueError(f'min_fraction_digits {min_digits} exceeds max_fraction_digits {max_digits}')

    exact = Decimal(str(number))
    quantum = Decimal(1).scaleb(-max_digits)

    # quantize needs room for every integer digit plus the fraction
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, max(exact.adjusted(), 0) + max_digits + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)

    sign = '-' if rounded < 0 else ''
    integer_part, _, fraction_part = f'{rounded.copy_abs():f}'.partition('.')

    fraction_part = fraction_part.rstrip('0')
    if len(fraction_part) < min_digits:
        fraction_part = fraction_part.ljust(min_digits, '0')

    formatted = _group_thousands(integer_part)
    if fraction_part:
        formatted = f'{formatted},{fraction_part}'
    return f'{sign}{formatted}'


def format_currency(value, min_fraction_digits=DEFAULT_FRACTION_DIGITS,
                    max_fraction_digits=DEFAULT_FRACTION_DIGITS, show_symbol=True):
    """
    Format a number as Brazilian currency.

    Args:
        value: int, float, Decimal or text such as 'R$ 1.234,56'
        min_fraction_digits: minimum decimals shown (clamped to 0..20)
        max_fraction_digits: maximum decimals shown (clamped to 0..20)
        show_symbol: prefix with 'R$ '

    Returns:
        str: e.g. 'R$ 1.234,56', or 'R$ 0,00' for anything unformattable
    """
    number = _to_number(value)

    if isinstance(number, float) and (math.isnan(number) or math.isinf(number)):
        return _zero(show_symbol)
    if isinstance(number, Decimal) and not number.is_finite():
        return _zero(show_symbol)

    min_digits = _clamp_fraction_digits(min_fraction_digits)
    max_digits = _clamp_fraction_digits(max_fraction_digits)

    try:
        formatted = _format_number(number, min_digits, max_digits)
    except (ArithmeticError, InvalidOperation, ValueError) as e:
        logger.warning(
            "Error formatting currency: %s value=%r min=%r max=%r",
            e, value, min_fraction_digits, max_fraction_digits
        )
        return _zero(show_symbol)

    return f'{SYMBOL} {formatted}' if show_symbol else formatted


def parse_currency(text):
    """
    Parse formatted currency back into a float.

    Returns:
        float: the value, or 0.0 when nothing numeric can be read
    """
    if not text:
        return 0.0

    number = _leading_float(_strip_to_number_text(str(text)))
    if math.isnan(number):
        return 0.0
    return number


def apply_mask(text):
    """
    Mask input as typed on a cents keypad.

    Every digit typed shifts the value left: '1' -> R$ 0,01,
    '12345' -> R$ 123,45. Non-digits are discarded.
    """
    digits = _NON_DIGIT.sub('', text or '')

    if not digits:
        return ''

    cents = int(digits)
    return format_currency(Decimal(cents) / 100)
