#!/usr/bin/env python3
"""CLI for Users API management tasks.

Usage:
    python -m cli <command>

Commands:
    init-db    Create the database schema
    serve      Run the API with uvicorn
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def _init_db() -> None:
    from core.database import create_engine, create_schema, dispose_engine, init_db

    engine = create_engine()
    try:
        await init_db(engine)
        await create_schema(engine)
    finally:
        await dispose_engine(engine)


def cmd_init_db() -> int:
    """Create the database schema."""
    logger.info("Creating database schema...")
    asyncio.run(_init_db())
    logger.info("Schema ready")
    return 0


def cmd_serve(host: str, port: int, reload: bool) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("main:app", host=host, port=port, reload=reload)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Users API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create the database schema")

    serve = subparsers.add_parser("serve", help="Run the API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    args = parser.parse_args(argv)

    if args.command == "init-db":
        return cmd_init_db()
    if args.command == "serve":
        return cmd_serve(args.host, args.port, args.reload)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
