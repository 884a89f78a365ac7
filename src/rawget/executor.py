import logging
from typing import Callable

from .config import ClientConfig
from .errors import TargetError, UnsupportedScheme
from .models import Measurement
from .target import resolve_target
from .transport import Connector, PlainConnector, SecureConnector

logger = logging.getLogger(__name__)


def get_request(url: str, config: ClientConfig,
                connectors: dict[str, Connector] | None = None,
                out: Callable[[str], None] = print) -> Measurement | None:
    """One-shot GET of ``url``, echoing every response line.

    An unusable URL is reported and skipped; nothing is dialed.
    """
    try:
        target = resolve_target(url)
    except TargetError as e:
        logger.debug("skipping %s: %s", url, e)
        if isinstance(e, UnsupportedScheme):
            out("Please include http or https in the URL.")
        else:
            out(str(e))
        return None

    if connectors is None:
        connectors = {
            "http": PlainConnector(),
            "https": SecureConnector(config.root_pem),
        }
    connector = connectors[target.scheme]
    logger.debug("one-shot GET %s", target.url)
    return connector.fetch(target.host, target.path, echo=True, out=out)
