"""
Command-line interface for envgen.

Usage:
    envgen <template_path> <output_path> [options]
    envgen --help

Examples:
    envgen .env.example .env
    envgen .env.example /srv/app/.env --log-level INFO
    envgen .env.example .env --report-only
"""
import argparse
import sys
from typing import List, Optional

from envgen import __version__
from envgen.config import get_settings
from envgen.config_constants import LogLevel
from envgen.domain.errors import EnvGenError
from envgen.services.exporter import TemplateExporter
from envgen.services.serializer import render_export_set
from envgen.utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envgen",
        description="Generate a runtime .env file from a key template and the current environment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Only keys listed in the template AND defined in the environment are written.\n"
            "\n"
            "Examples:\n"
            "  envgen .env.example .env\n"
            "  envgen .env.example .env --report-only\n"
        ),
    )

    parser.add_argument("template_path",
                        help="Template file listing the expected keys")
    parser.add_argument("output_path",
                        help="Output file to generate (overwritten if present)")
    parser.add_argument("--report-only", action="store_true",
                        help="Print the entries that would be written without writing them")
    parser.add_argument("--no-quote", action="store_true",
                        help="Write values verbatim, never double quoted")
    parser.add_argument("--log-level", type=str.upper,
                        choices=[level.value for level in LogLevel],
                        help="Log level for stderr diagnostics (default: from ENVGEN_APP__LOG_LEVEL)")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def run_cli(args: argparse.Namespace) -> int:
    """Execute the generator from parsed CLI args. Returns exit code."""
    try:
        settings = get_settings()
        configure_logging(LogLevel(args.log_level) if args.log_level else None)

        config = settings.generator
        if args.no_quote:
            config = config.model_copy(update={"quote_values": False})

        exporter = TemplateExporter(config)
        report = exporter.run(
            args.template_path,
            args.output_path,
            report_only=args.report_only,
        )
    except EnvGenError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return e.exit_code

    if args.report_only:
        sys.stdout.write(render_export_set(report.entries, quote_values=config.quote_values))
        print(f"Would generate {report.output_path} with {report.exported_count} entries")
    else:
        print(
            f"Generated {report.output_path} with {report.exported_count} entries: "
            f"{report.output_path}"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return run_cli(args)


if __name__ == "__main__":
    sys.exit(main())
