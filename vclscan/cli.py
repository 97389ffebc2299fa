import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .audit import HeaderAuditor, ProbeError, VarnishAdmProbe
from .core.classifier import DirectiveClassifier
from .core.config import (
    DEFAULT_ADMIN_BINARY,
    DEFAULT_ADMIN_HOST,
    DEFAULT_ADMIN_PORT,
    DEFAULT_ADMIN_TIMEOUT,
    DEFAULT_SECRET_FILE,
    AdminConfig,
)
from .core.models import Annotation
from .core.reporting import Reporter, render_annotations
from .core.scanner import (
    DEFAULT_EXCLUDE,
    DEFAULT_INCLUDE,
    DirectoryScanner,
    SingleFileScanner,
    configure_logging,
)
from .core.utils import split_globs
from .parsers.vcl import UnreadableFileError

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_AUDIT_FAILED = 3


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vclscan",
        description="Annotate a Varnish VCL file line by line and audit the live instance's active configuration.",
    )
    p.add_argument("path", type=Path, nargs="?", help="VCL file to analyze, or a directory to scan recursively.")
    p.add_argument("--line-numbers", action="store_true", help="Prefix each annotation with its file and line number.")
    p.add_argument("--out", type=Path, default=None, help="Also write JSON/Markdown reports to this directory.")
    p.add_argument("--no-audit", action="store_true", help="Skip the live header audit.")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")

    d = p.add_argument_group("directory scans")
    d.add_argument("--include", default=DEFAULT_INCLUDE, help="Glob(s) to include, comma-separated.")
    d.add_argument("--exclude", default=DEFAULT_EXCLUDE, help="Dir names to exclude, comma-separated.")
    d.add_argument("--max-file-size", type=int, default=5_000_000, help="Max file size in bytes to parse (default 5MB).")
    d.add_argument("--no-progress", action="store_true", help="Disable the progress bar during directory scans.")

    a = p.add_argument_group("header audit")
    a.add_argument("--admin-host", default=DEFAULT_ADMIN_HOST, help="Varnish management interface host.")
    a.add_argument("--admin-port", type=int, default=DEFAULT_ADMIN_PORT, help="Varnish management interface port.")
    a.add_argument("--secret-file", type=Path, default=DEFAULT_SECRET_FILE, help="Shared secret file passed to varnishadm -S.")
    a.add_argument("--varnishadm", default=DEFAULT_ADMIN_BINARY, help="varnishadm executable to run.")
    a.add_argument("--admin-timeout", type=float, default=DEFAULT_ADMIN_TIMEOUT, help="Seconds to wait for varnishadm.")

    return p


def scan_path(args: argparse.Namespace, logger: logging.Logger) -> Dict[Path, List[Annotation]]:
    classifier = DirectiveClassifier()
    if args.path.is_dir():
        scanner = DirectoryScanner(
            root=args.path,
            classifier=classifier,
            include_globs=split_globs(args.include),
            exclude_dirs=split_globs(args.exclude),
            max_file_size=args.max_file_size,
            logger=logger,
            show_progress=not args.no_progress,
        )
        return scanner.scan()
    scanner = SingleFileScanner(args.path, classifier, logger=logger)
    return {args.path: scanner.scan()}


def run_audit(args: argparse.Namespace, logger: logging.Logger) -> List[str]:
    probe = VarnishAdmProbe(AdminConfig.from_args(args), logger=logger)
    return HeaderAuditor(probe).audit()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.path is None:
        print(f"Usage: {parser.prog} <path_to_varnish_config_file>")
        return EXIT_USAGE
    if not args.path.exists():
        print(f"Error: Configuration file '{args.path}' not found!")
        return EXIT_USAGE

    logger = configure_logging(verbose=args.verbose)

    try:
        results = scan_path(args, logger)
    except (UnreadableFileError, OSError) as exc:
        print(f"Error: {exc}")
        return EXIT_USAGE

    if args.path.is_dir() and not results:
        print(f"No files matching '{args.include}' found under '{args.path}'.")

    for path, annotations in results.items():
        print(f"Analyzing Varnish Configuration File: {path}")
        for line in render_annotations(annotations, line_numbers=args.line_numbers):
            print(line)

    exit_code = EXIT_OK
    audit_lines: Optional[List[str]] = None
    if not args.no_audit:
        try:
            audit_lines = run_audit(args, logger)
        except ProbeError as exc:
            logger.warning("Header audit failed: %s", exc)
            audit_lines = [f"Header audit failed: {exc}"]
            exit_code = EXIT_AUDIT_FAILED
        for line in audit_lines:
            print(line)

    if args.out is not None:
        Reporter(args.out).write_all(results, audit_lines)

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
