import argparse
import logging
import sys

import config, web_remote
from api_client import SignageAPI
from app import SignageApp


def setup_logging(level: int = logging.INFO, logfile: str = config.LOG_FILE) -> None:
    handlers = [logging.StreamHandler(sys.stderr)]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        handlers=handlers,
    )


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Campus signage display")
    ap.add_argument("--base-url", default=config.BASE_URL,
                    help=f"signage backend root (default: {config.BASE_URL})")
    ap.add_argument("--windowed", action="store_true",
                    help=f"run in a {config.WINDOWED_SIZE[0]}x{config.WINDOWED_SIZE[1]} window")
    ap.add_argument("--port", type=int, default=config.WEB_PORT,
                    help="web remote port (0 disables it)")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    app = SignageApp(SignageAPI(args.base_url),
                     fullscreen=config.FULLSCREEN and not args.windowed)
    if args.port:
        web_remote.start(app, args.port)
    app.run()


if __name__ == "__main__":
    main()
