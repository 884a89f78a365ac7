"""Exceptions raised by rawget. Everything derives from RawGetError."""


class RawGetError(Exception):
    pass


class TargetError(RawGetError):
    """No Target could be resolved from a URL; nothing was dialed."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} in {url!r}")
        self.url = url


class UnsupportedScheme(TargetError):
    """The URL has neither http:// nor https:// in it."""

    def __init__(self, url: str):
        super().__init__(url, "unsupported or missing scheme")


class InvalidURL(TargetError):
    """The URL has a scheme but cannot be parsed or has no host to dial."""

    def __init__(self, url: str, reason: str = "no host"):
        super().__init__(url, reason)


class CertificatePoolError(RawGetError):
    """The extra root certificate could not be added to the trust store."""

    def __init__(self, path: str, cause: Exception | None = None):
        msg = f"failed to parse root certificate {path}"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
        self.path = path
        self.cause = cause


class ConnectError(RawGetError):
    def __init__(self, host: str, cause: Exception):
        super().__init__(f"Error connecting to: {host}\n {cause}")
        self.host = host
        self.cause = cause


class ResponseError(RawGetError):
    pass


class ResponseReadError(ResponseError):
    """The first response line could not be read."""

    def __init__(self, cause: Exception | str):
        super().__init__(f"Error reading response: {cause}")
        self.cause = cause


class MalformedStatusLine(ResponseError):
    def __init__(self, line: str):
        super().__init__(f"malformed status line: {line!r}")
        self.line = line
