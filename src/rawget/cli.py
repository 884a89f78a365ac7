import argparse
import logging
import sys

from pydantic import ValidationError

from .config import ClientConfig
from .errors import RawGetError
from .executor import get_request
from .profiler import PROFILE_HOST, PROFILE_PATH, profile

logger = logging.getLogger("rawget")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="rawget", description="Raw HTTP/HTTPS GET client and endpoint profiler")
    ap.add_argument("--url", help="Make a GET request using a provided URL. Usage: --url=<url>")
    ap.add_argument("--profile", type=int, default=0,
                    help=f"Profile https://{PROFILE_HOST}{PROFILE_PATH}. Usage: --profile=<number_of_requests>")
    ap.add_argument("--root-pem", help="extra trusted root certificate, PEM (default $ROOT_PEM or rootPEM.txt)")
    ap.add_argument("--plot", help="save a latency chart of the profiling run to this file")
    ap.add_argument("--log-level", help="logging level (default $LOG_LEVEL or WARNING)")
    return ap


def load_config(argv: list[str] | None = None) -> ClientConfig:
    ap = build_parser()
    args = ap.parse_args(argv)
    try:
        return ClientConfig.from_env(
            url=args.url,
            profile=args.profile,
            root_pem=args.root_pem,
            plot=args.plot,
            log_level=args.log_level,
        )
    except ValidationError as e:
        ap.error(str(e))


def run(config: ClientConfig) -> None:
    if config.url:
        get_request(config.url, config)
    if config.profile > 0:
        result = profile(config.profile, root_pem=config.root_pem)
        if result is not None and config.plot:
            from .plot import plot_latencies
            print(f"Plot saved as '{plot_latencies(result, config.plot)}'")


def main(argv: list[str] | None = None) -> int:
    config = load_config(argv)
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        run(config)
    except RawGetError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
