#!/usr/bin/env python3
"""
Product authenticity ledger management CLI.

Usage:
    python manage.py serve          Start the API server
    python manage.py migrate        Apply pending SQLite migrations
    python manage.py seed           Register the demo products
    python manage.py export         Write the compliance report JSON
    python manage.py generate-id    Print fresh product identifiers
"""

import argparse
import asyncio
import json
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


async def _prepare_storage() -> None:
    """Migrate and open the pool when the SQLite backend is configured."""
    from src.config import get_settings

    if get_settings().storage.backend != "sqlite":
        return

    from src.infrastructure.storage.sqlite import get_connection_pool
    from src.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    await run_migrations()
    await get_connection_pool()


async def _close_storage() -> None:
    from src.config import get_settings

    if get_settings().storage.backend == "sqlite":
        from src.infrastructure.storage.sqlite import close_connection_pool

        await close_connection_pool()


def cmd_serve(args: argparse.Namespace) -> None:
    """Run uvicorn in the foreground."""
    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "src.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")

    print(f"Starting server on {args.host}:{args.port}...")
    try:
        subprocess.run(uvicorn_cmd, cwd=str(ROOT_DIR), check=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply migrations and report the schema version."""
    from src.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
        initialize_database,
    )

    async def run() -> None:
        results = await initialize_database(create_backup_before=not args.no_backup)
        for result in results:
            state = "ok" if result.success else f"FAILED: {result.error}"
            print(f"v{result.version}_{result.name}: {state} ({result.execution_time_ms}ms)")
        if not results:
            print("Database is up to date.")
        status = await get_migration_status()
        print(f"Current version: {status.get('current_version')}")

    asyncio.run(run())


def cmd_seed(args: argparse.Namespace) -> None:
    """Register PRD-DEMO-AUTHENTIC and PRD-DEMO-COUNTERFEIT."""
    from src.application.services import get_product_ledger
    from src.core.services import seed_demo_products

    async def run() -> None:
        await _prepare_storage()
        try:
            seeded = await seed_demo_products(get_product_ledger())
        finally:
            await _close_storage()
        if seeded:
            for product in seeded:
                print(f"Seeded {product.identifier} (product {product.product_id})")
        else:
            print("Demo products already present.")

    asyncio.run(run())


def cmd_export(args: argparse.Namespace) -> None:
    """Print or write the compliance snapshot."""
    from src.application.services import get_query_service
    from src.application.use_cases import export_filename
    from src.core.entities.ledger import ReportFilter

    report_filter = ReportFilter(
        product_id=args.product_id,
        manufacturer=args.manufacturer,
        reason=args.reason,
        search=args.search,
    )

    async def run() -> None:
        await _prepare_storage()
        try:
            snapshot = await get_query_service().compliance_snapshot(report_filter)
        finally:
            await _close_storage()

        document = json.dumps(snapshot.to_document(), indent=2)
        if args.output == "-":
            print(document)
            return

        output = Path(args.output or export_filename(snapshot.generated_at))
        output.write_text(document, encoding="utf-8")
        print(
            f"Wrote {output} ({snapshot.total_products} products, "
            f"{len(snapshot.reports)} of {snapshot.report_count} reports)"
        )

    asyncio.run(run())


def cmd_generate_id(args: argparse.Namespace) -> None:
    """Print identifiers without registering them."""
    from src.application.services import get_identifier_generator

    generator = get_identifier_generator()
    for _ in range(args.count):
        print(generator.generate())


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Product authenticity ledger management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending SQLite migrations")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # seed
    p_seed = sub.add_parser("seed", help="Register the demo products")
    p_seed.set_defaults(func=cmd_seed)

    # export
    p_export = sub.add_parser("export", help="Write the compliance report JSON")
    p_export.add_argument(
        "--output", "-o",
        default=None,
        help="Output file, '-' for stdout (default: counterfeit-report-<date>.json)",
    )
    p_export.add_argument("--product-id", default=None, help="Only reports whose product id contains this")
    p_export.add_argument("--manufacturer", default=None, help="Only reports for this manufacturer")
    p_export.add_argument("--reason", default=None, help="Only reports whose reason contains this")
    p_export.add_argument("--search", default=None, help="Free-text match on product, manufacturer or reason")
    p_export.set_defaults(func=cmd_export)

    # generate-id
    p_gen = sub.add_parser("generate-id", help="Print fresh product identifiers")
    p_gen.add_argument("-n", "--count", type=int, default=1, help="How many (default: 1)")
    p_gen.set_defaults(func=cmd_generate_id)

    args = parser.parse_args()

    from src.config import configure_logging

    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
