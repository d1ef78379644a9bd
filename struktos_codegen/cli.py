"""Command-line entry point: ``struktos-gen`` / ``python -m struktos_codegen.cli``.

Examples::

    struktos-gen entity User -f "name:string,email:string,age:number?"
    struktos-gen use-case create -e User --no-logger
    struktos-gen middleware auth --with-logger
    struktos-gen service user -t grpc -m get,list
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.logging import RichHandler

from struktos_codegen.config import EngineConfig, UnknownRoleError
from struktos_codegen.scaffolder import CodeGenerator, GeneratedArtifact, TemplateNotFoundError, write_artifacts
from struktos_codegen.utils import (
    console,
    print_error,
    print_file_list,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="struktos-gen",
        description="Struktos code generator -- hexagonal-architecture scaffolding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  struktos-gen entity User -f "name:string,email:string"\n'
            "  struktos-gen use-case create -e User\n"
            "  struktos-gen service user -t grpc -m get,list\n"
        ),
    )
    parser.add_argument(
        "--project-root",
        default=None,
        help="Project root holding config/struktos.metadata.json (default: cwd)",
    )
    parser.add_argument(
        "--templates-dir",
        default=None,
        help="Use templates from this directory instead of the bundled ones",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show what would be written")
    parser.add_argument("--force", action="store_true", help="Overwrite existing files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    entity = sub.add_parser("entity", help="Entity, repository port and repository adapter")
    entity.add_argument("name", help="Entity name, e.g. User")
    entity.add_argument(
        "--fields", "-f",
        default=None,
        help='Field list, e.g. "name:string,bio:string?"',
    )

    use_case = sub.add_parser("use-case", help="Application use case")
    use_case.add_argument("action", help="Action, e.g. create")
    use_case.add_argument("--entity", "-e", required=True, help="Entity the use case acts on")
    use_case.add_argument("--fields", "-f", default=None, help="Entity fields for the input shape")
    use_case.add_argument("--no-repository", action="store_true", help="Do not inject the repository")
    use_case.add_argument("--no-logger", action="store_true", help="Do not inject a logger")
    use_case.add_argument("--no-validation", action="store_true", help="Skip input validation")

    middleware = sub.add_parser("middleware", help="Request interceptor")
    middleware.add_argument("name", help="Interceptor name, e.g. auth")
    kind = middleware.add_mutually_exclusive_group()
    kind.add_argument("--logging", action="store_true", help="Generate the stock logging interceptor")
    kind.add_argument("--timing", action="store_true", help="Generate the stock timing interceptor")
    middleware.add_argument("--with-logger", action="store_true", help="Inject ILogger")

    client = sub.add_parser("client", help="gRPC client adapter")
    client.add_argument("service", help="Remote service name, e.g. inventory")
    client.add_argument("--with-port", action="store_true", help="Also generate the client port")

    service = sub.add_parser("service", help="gRPC service or HTTP controller")
    service.add_argument("name", help="Service name, e.g. user")
    service.add_argument(
        "--type", "-t",
        choices=("grpc", "http"),
        default="grpc",
        help="Transport (default: grpc)",
    )
    service.add_argument(
        "--methods", "-m",
        default=None,
        help="Comma-separated methods (default: get,list,create,update,delete)",
    )

    return parser


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _generate(generator: CodeGenerator, args: argparse.Namespace) -> list[GeneratedArtifact]:
    if args.command == "entity":
        return generator.entity(args.name, args.fields)
    if args.command == "use-case":
        return generator.use_case(
            args.action,
            args.entity,
            with_repository=not args.no_repository,
            with_logger=not args.no_logger,
            with_validation=not args.no_validation,
            fields=args.fields,
        )
    if args.command == "middleware":
        kind = "logging" if args.logging else "timing" if args.timing else "default"
        return generator.middleware(args.name, kind=kind, with_logger=args.with_logger)
    if args.command == "client":
        return generator.client(args.service, with_port=args.with_port)
    if args.type == "http":
        return generator.http_service(args.name, args.methods)
    return generator.grpc_service(args.name, args.methods)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``struktos-gen``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    config = EngineConfig(
        project_root=Path(args.project_root) if args.project_root else Path.cwd(),
        templates_dir=Path(args.templates_dir) if args.templates_dir else None,
        overwrite=args.force,
        dry_run=args.dry_run,
    )

    try:
        generator = CodeGenerator(config)
        artifacts = _generate(generator, args)
    except (ValueError, UnknownRoleError, TemplateNotFoundError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_header(f"struktos-gen {args.command}")
    print_summary_table({
        "Project root": str(config.project_root),
        "Framework": generator.metadata.framework,
        "Files": str(len(artifacts)),
        "Mode": "dry run" if config.dry_run else "write",
    })

    paths = [artifact.file_path for artifact in artifacts]
    if config.dry_run:
        print_file_list(paths, title="Would generate")
        return

    if config.overwrite:
        existing = [path for path in paths if (config.project_root / path).exists()]
        if existing:
            print_warning(f"Overwriting {len(existing)} existing file(s)")

    try:
        asyncio.run(write_artifacts(artifacts, config.project_root, overwrite=config.overwrite))
    except FileExistsError as exc:
        print_error(f"Error: {exc} (use --force to overwrite)")
        sys.exit(1)

    print_file_list(paths)
    print_success(f"Generated {len(artifacts)} file(s)")


if __name__ == "__main__":
    main()
