import random
import re
import string


# Case-sensitive Base62 alphabet: A-Z, a-z, 0-9
CHARSET = string.ascii_uppercase + string.ascii_lowercase + string.digits

SHORT_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")

# Paths served by the app itself; a link under one of these could never redirect
RESERVED_CODES = frozenset({"health", "healthz"})


def generate_short_code(length: int = 6) -> str:
    """
    Generate a random short code.

    Args:
        length: Length of the code

    Returns:
        A code drawn uniformly from CHARSET

    Note:
        - 6 chars: 62^6 = 56,800,235,584 combinations
        - Uniqueness is not checked here; the caller retries on collision
    """
    return ''.join(random.choices(CHARSET, k=length))


def is_reserved_code(code: str) -> bool:
    return code in RESERVED_CODES


def validate_short_code(code: str) -> tuple[bool, str]:
    """
    Validate a caller-supplied short code.

    Args:
        code: The requested short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not code or not SHORT_CODE_PATTERN.fullmatch(code):
        return False, "Short code must be 6-8 alphanumeric characters"

    if is_reserved_code(code):
        return False, f"'{code}' is a reserved word and cannot be used"

    return True, ""
