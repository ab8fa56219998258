"""
Template exporter: parse -> filter -> serialize.

This service ties the template parser, the environment lookup and the
serializer together. It holds configuration only; every call reads
its own template and environment snapshot.

Usage:
    from envgen import generate, generate_and_report

    entries = generate(".env.example", ".env")
    count = generate_and_report(".env.example", ".env")
"""

from pathlib import Path
from typing import Mapping, Optional, Union

from ..config import GeneratorConfig, get_settings
from ..domain.base_enums import LineKind
from ..domain.errors import EnvGenError
from ..domain.models import GenerationReport
from ..domain.types import ExportSet
from ..parsing.template_parser import parse_lines, read_template
from ..utils.logging import get_module_logger
from ..utils.tracing import generate_run_id, set_run_id
from .export_builder import build_export_set, take_environment_snapshot
from .serializer import render_export_set, write_output


logger = get_module_logger()

PathLike = Union[str, Path]


class TemplateExporter:
    """
    Stateless service generating a runtime .env file from a template.

    Usage:
        exporter = TemplateExporter(get_settings().generator)
        report = exporter.run(".env.example", ".env")
        print(report.exported_count)
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """
        Initialize the exporter.

        Args:
            config: Generator settings; defaults to GeneratorConfig()
        """
        self.config = config or GeneratorConfig()

    def run(
        self,
        template_path: PathLike,
        output_path: PathLike,
        report_only: bool = False,
        environment: Optional[Mapping[str, str]] = None,
    ) -> GenerationReport:
        """
        Generate the output file and describe the result.

        The template is read before anything is written, so a missing
        template leaves the output path untouched.

        Args:
            template_path: Template listing the expected keys
            output_path: Destination file, overwritten if present
            report_only: If True, nothing is written
            environment: Mapping to look keys up in; defaults to os.environ

        Returns:
            GenerationReport with the export set and counters

        Raises:
            TemplateNotFoundError: If the template cannot be read
            WriteFailureError: If the output cannot be written
        """
        run_id = generate_run_id()
        set_run_id(run_id)

        try:
            snapshot = take_environment_snapshot(environment)
            lines = read_template(template_path, encoding=self.config.template_encoding)

            keys = []
            skipped_lines = 0
            for parsed in parse_lines(lines):
                if parsed.kind == LineKind.ASSIGNMENT:
                    keys.append(parsed.key)
                elif parsed.kind == LineKind.MALFORMED:
                    skipped_lines += 1

            entries = build_export_set(keys, snapshot)
            candidates = set(keys)

            report = GenerationReport(
                template_path=str(template_path),
                output_path=str(output_path),
                run_id=run_id,
                entries=entries,
                candidate_count=len(candidates),
                missing_count=len(candidates) - len(entries),
                skipped_lines=skipped_lines,
            )

            if not report_only:
                content = render_export_set(entries, quote_values=self.config.quote_values)
                write_output(output_path, content, encoding=self.config.output_encoding)
                report.written = True

            logger.info(
                "Template exported",
                template_path=report.template_path,
                output_path=report.output_path,
                exported_count=report.exported_count,
                missing_count=report.missing_count,
                skipped_lines=report.skipped_lines,
                report_only=report_only,
                run_id=run_id,
            )
            return report

        except EnvGenError as e:
            logger.error(
                "Template export failed",
                error_code=e.error_code,
                error=e.message,
                run_id=run_id,
            )
            raise
        finally:
            set_run_id(None)

    def generate(
        self,
        template_path: PathLike,
        output_path: PathLike,
        report_only: bool = False,
        environment: Optional[Mapping[str, str]] = None,
    ) -> ExportSet:
        """Write the output file (unless report_only) and return the export set."""
        return self.run(template_path, output_path, report_only, environment).entries

    def generate_and_report(
        self,
        template_path: PathLike,
        output_path: PathLike,
        environment: Optional[Mapping[str, str]] = None,
    ) -> int:
        """Write the output file and return the number of exported entries."""
        return self.run(template_path, output_path, environment=environment).exported_count


def _default_exporter() -> TemplateExporter:
    return TemplateExporter(get_settings().generator)


def generate(
    template_path: PathLike,
    output_path: PathLike,
    report_only: bool = False,
    environment: Optional[Mapping[str, str]] = None,
) -> ExportSet:
    """
    Generate `output_path` from `template_path` and the process environment.

    Args:
        template_path: Template listing the expected keys
        output_path: Destination file, overwritten if present
        report_only: If True, return the export set without writing
        environment: Mapping to use instead of os.environ

    Returns:
        Export set in template order
    """
    return _default_exporter().generate(template_path, output_path, report_only, environment)


def generate_and_report(
    template_path: PathLike,
    output_path: PathLike,
    environment: Optional[Mapping[str, str]] = None,
) -> int:
    """Generate `output_path` and return the number of entries written."""
    return _default_exporter().generate_and_report(template_path, output_path, environment)
