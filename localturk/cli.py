"""Command line entry point.

    localturk [options] template.html tasks.csv outputs.csv
    localturk --write-template tasks.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import webbrowser
from typing import List, Optional

import uvicorn

from .config import Settings
from .logging_setup import setup_logging
from .main import __version__, create_app
from .services.render import make_template
from .storage.csv_store import CsvStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localturk",
        description="Run Mechanical Turk-like tasks locally.",
        usage="%(prog)s [options] template.html tasks.csv outputs.csv",
    )
    parser.add_argument("files", nargs="+", metavar="FILE")
    parser.add_argument("-p", "--port", type=int, default=4321, help="Run on this port (default 4321)")
    parser.add_argument(
        "-s", "--static-dir",
        help="Serve static content from this directory. Default is same directory as template file.",
    )
    parser.add_argument(
        "-w", "--write-template", action="store_true",
        help="Generate a stub template file based on the input CSV.",
    )
    parser.add_argument("--user-db", default="meta/user_db.csv", help="CSV with a 'uid' column of allowed users")
    parser.add_argument("--login-page", default="login.html")
    parser.add_argument("--exit-when-done", action="store_true", help="Stop the server once every task is answered")
    parser.add_argument("--no-open", action="store_true", help="Do not open a browser window")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.write_template:
        if len(args.files) != 1:
            parser.error("--write-template takes exactly one argument: tasks.csv")
        sys.stdout.write(make_template(CsvStore(args.files[0]).read_headers()))
        return 0

    if len(args.files) != 3:
        parser.error("expected template.html tasks.csv outputs.csv")

    template_file, tasks_file, outputs_file = args.files
    settings = Settings(
        template_file=template_file,
        tasks_file=tasks_file,
        outputs_file=outputs_file,
        port=args.port,
        static_dir=args.static_dir,
        user_db=args.user_db,
        login_page=args.login_page,
        exit_when_done=args.exit_when_done,
        open_browser=not args.no_open,
        log_level=args.log_level,
    )
    app = create_app(settings)

    url = f"http://localhost:{settings.port}"
    logger.info("Running local turk on %s", url)
    if settings.open_browser:
        threading.Timer(1.0, webbrowser.open, args=(url,)).start()
    uvicorn.run(app, host="127.0.0.1", port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
