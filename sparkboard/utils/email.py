"""
E-mail normalization, validation and typo suggestions
"""
import re


EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

# Checked in order; the first similar domain wins
COMMON_EMAIL_DOMAINS = (
    'gmail.com',
    'hotmail.com',
    'outlook.com',
    'yahoo.com',
    'uol.com.br',
    'terra.com.br',
    'bol.com.br',
    'ig.com.br',
)

MAX_DOMAIN_DIFFERENCES = 2


def normalize(text):
    """Trim and lowercase"""
    if not text:
        return ''
    return str(text).strip().lower()


def is_valid(text):
    """Check the local@domain.tld shape"""
    if not text:
        return False
    return EMAIL_PATTERN.match(str(text).strip()) is not None


def domain_of(text):
    """Domain part of a valid e-mail, or '' when the e-mail is invalid"""
    if not is_valid(text):
        return ''
    return str(text).strip().split('@')[1]


def is_from_domain(text, domain):
    """Case-insensitive domain comparison"""
    return domain_of(text).lower() == (domain or '').lower()


def _is_similar(first, second):
    """Position-wise comparison allowing up to two differing characters"""
    if abs(len(first) - len(second)) > MAX_DOMAIN_DIFFERENCES:
        return False

    differences = 0
    for index in range(max(len(first), len(second))):
        a = first[index] if index < len(first) else None
        b = second[index] if index < len(second) else None
        if a != b:
            differences += 1
            if differences > MAX_DOMAIN_DIFFERENCES:
                return False

    return True


def suggest_correction(text):
    """
    Suggest a fix for a mistyped common domain.

    'joao@gmial.com' -> 'joao@gmail.com'. The first similar common domain in
    list order wins, and it only has to differ from the typed one: bol.com.br
    and uol.com.br are one letter apart, so 'ana@bol.com.br' is offered
    'ana@uol.com.br'. Returns None when nothing similar is found.
    """
    if not text or '@' not in text:
        return None

    local_part, domain = text.split('@')[:2]
    if not domain:
        return None

    domain = domain.lower()

    for common_domain in COMMON_EMAIL_DOMAINS:
        if domain != common_domain and _is_similar(domain, common_domain):
            return f'{local_part}@{common_domain}'

    return None
