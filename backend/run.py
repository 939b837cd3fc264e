"""
Development server entry point.

Host and port default to the HOST and PORT settings.

Usage:
    python run.py              # normal mode
    python run.py --reload     # with auto-reload
"""
import argparse

import uvicorn

from contentops.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the Content Ops API with uvicorn")
    parser.add_argument("--reload", action="store_true", default=False)
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    uvicorn.run(
        "contentops.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
