"""CLI for TrashTrack: table setup, recent reports, one-off verification."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path


async def cmd_init_db(args):
    """Create the users and reports tables."""
    from app.db.engine import create_tables, engine

    await create_tables()
    await engine.dispose()
    print(f"Tables ready at {engine.url}")


async def cmd_recent(args):
    """Print the most recent reports, newest first."""
    from app.db.engine import async_session_factory, create_tables, engine
    from app.db import crud
    from app.schemas import ReportRead

    await create_tables()
    async with async_session_factory() as db:
        reports = await crud.get_recent_reports(db, limit=args.limit)
    await engine.dispose()

    if not reports:
        print("No reports yet")
        return
    for r in reports:
        row = ReportRead.from_model(r)
        print(f"{row.created_at}  {row.waste_type:<15} {row.amount:<12} {row.location}")


async def cmd_verify(args):
    """Run waste verification on a local image file and print the result."""
    from app.agents.verification.graph import run_verification
    from app.services.image_intake import read_upload

    path = Path(args.image)
    if not path.is_file():
        print(f"No such file: {path}")
        sys.exit(1)

    image = await read_upload(path.read_bytes(), None, path.name)
    result = await run_verification(image)
    if result is None:
        print("Verification failed")
        sys.exit(2)
    print(result.model_dump_json(by_alias=True, indent=2))


def main():
    parser = argparse.ArgumentParser(description="TrashTrack CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    subparsers.add_parser("init-db", help="Create database tables")

    # recent
    rc = subparsers.add_parser("recent", help="List recent reports")
    rc.add_argument("--limit", type=int, default=10, help="Number of reports to show")

    # verify
    vf = subparsers.add_parser("verify", help="Classify the waste in an image file")
    vf.add_argument("image", help="Path to an image file")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "recent":
        asyncio.run(cmd_recent(args))
    elif args.command == "verify":
        asyncio.run(cmd_verify(args))


if __name__ == "__main__":
    main()
