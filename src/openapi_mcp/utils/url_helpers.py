"""URL construction and percent-encoding utilities"""

from urllib.parse import quote, urlsplit

# Ports omitted from a normalized base URL
_DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value: str) -> str:
    """
    Percent-encode everything except RFC 3986 unreserved characters.

    This is the encoding both OAuth 1.0a and URL path/query building use.

    Examples:
        >>> percent_encode("a b&c")
        'a%20b%26c'
        >>> percent_encode("-._~")
        '-._~'
    """
    return quote(value, safe="~")


def build_query_string(params: list[tuple[str, str]]) -> str:
    """
    Build an ``&``-joined query string, preserving parameter order.

    Examples:
        >>> build_query_string([("q", "a b"), ("page", "2")])
        'q=a%20b&page=2'
    """
    return "&".join(f"{percent_encode(key)}={percent_encode(value)}" for key, value in params)


def build_full_url(
    base_url: str,
    path: str,
    query_params: list[tuple[str, str]] | None = None,
) -> str:
    """
    Build an absolute URL from a base URL, a path and optional query parameters.

    Exactly one slash separates base and path regardless of how either is
    written.

    Examples:
        >>> build_full_url("https://example.com/v1/", "/users")
        'https://example.com/v1/users'
        >>> build_full_url("https://example.com", "users", [("limit", "5")])
        'https://example.com/users?limit=5'
    """
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    if query_params:
        url = f"{url}?{build_query_string(query_params)}"

    return url


def get_signature_base_url(url: str) -> str:
    """
    Get the URL used in an OAuth 1.0a signature base string.

    Scheme and host are lowercased, default ports dropped, and query and
    fragment removed. The path keeps its encoded form.

    Examples:
        >>> get_signature_base_url("HTTPS://Api.Example.com:443/v1/users?id=1")
        'https://api.example.com/v1/users'
        >>> get_signature_base_url("http://localhost:8080/token")
        'http://localhost:8080/token'
    """
    parsed = urlsplit(url)
    scheme = parsed.scheme.lower()
    host = (parsed.hostname or "").lower()

    base = f"{scheme}://{host}"
    if parsed.port is not None and parsed.port != _DEFAULT_PORTS.get(scheme):
        base += f":{parsed.port}"

    return base + (parsed.path or "/")


def extract_server_url(servers: object) -> str:
    """
    Get the first server URL of an OpenAPI ``servers`` list.

    Returns an empty string when nothing usable is declared.
    """
    if isinstance(servers, list) and len(servers) > 0 and isinstance(servers[0], dict):
        return str(servers[0].get("url", ""))
    return ""


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is valid.

    Args:
        url: URL to validate

    Returns:
        True if URL has valid scheme and netloc

    Examples:
        >>> is_valid_url("https://example.com")
        True
        >>> is_valid_url("not a url")
        False
    """
    try:
        result = urlsplit(url)
        return all([result.scheme, result.netloc])
    except ValueError:
        return False
