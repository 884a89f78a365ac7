"""rawget: hand-rolled HTTP/1.1 GET client with a sequential endpoint profiler."""

from .config import ClientConfig
from .errors import (
    CertificatePoolError,
    ConnectError,
    InvalidURL,
    MalformedStatusLine,
    RawGetError,
    ResponseError,
    ResponseReadError,
    TargetError,
    UnsupportedScheme,
)
from .executor import get_request
from .models import Measurement, Target
from .profiler import ProfileResult, profile
from .target import resolve_target

__version__ = "0.1.0"
