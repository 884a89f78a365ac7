from urllib.parse import urlsplit

from .errors import InvalidURL, UnsupportedScheme
from .models import Target


def resolve_target(url: str) -> Target:
    # Scheme comes from a plain substring check on the raw string, so
    # "ftp://x/?next=http://y" counts as plain http.
    if "https://" in url:
        scheme = "https"
    elif "http://" in url:
        scheme = "http"
    else:
        raise UnsupportedScheme(url)

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidURL(url, str(e)) from e
    host = parts.netloc.rpartition("@")[2]
    if not host:
        raise InvalidURL(url)
    return Target(scheme=scheme, host=host, path=parts.path or "/")
