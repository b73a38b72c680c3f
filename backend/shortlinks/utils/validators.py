from urllib.parse import urlparse

from ..config import settings


def is_valid_url(url: str) -> tuple[bool, str]:
    """
    Validate that a URL is a usable absolute redirect destination.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not url.strip():
        return False, "URL cannot be empty"

    if len(url) > settings.MAX_URL_LENGTH:
        return False, f"URL is too long (max {settings.MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "Invalid URL format"

    try:
        result = urlparse(url)
        # Accessing port validates it
        result.port
    except ValueError:
        return False, "Invalid URL format"

    # Must have scheme and host
    if not all([result.scheme, result.hostname]):
        return False, "Invalid URL format"

    allowed = settings.ALLOWED_URL_SCHEMES
    if allowed and result.scheme.lower() not in allowed:
        schemes = ", ".join(s.upper() for s in allowed)
        return False, f"Only {schemes} URLs are allowed"

    return True, ""
