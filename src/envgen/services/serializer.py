"""
Serializer for export sets.

Quoting policy:
- an empty value is written as KEY=
- a value containing whitespace or any of = " ' \\ # ` $ is wrapped in
  double quotes, with backslash, double quote, newline, carriage return
  and tab escaped as \\\\ \\" \\n \\r \\t
- any other value is written as is

Every quoted value parses back to the original through
envgen.parsing.template_parser.parse_value.
"""

import codecs
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from ..config_constants import DEFAULT_ENCODING, ESCAPE_SEQUENCES, QUOTE_TRIGGER_CHARS
from ..domain.errors import ConfigurationError, WriteFailureError
from ..domain.types import ExportSet
from ..utils.logging import get_module_logger
from ..utils.tracing import current_run_id


logger = get_module_logger()


def needs_quoting(value: str) -> bool:
    """Return True if `value` must be double quoted to survive a re-parse."""
    return any(char.isspace() or char in QUOTE_TRIGGER_CHARS for char in value)


def quote_value(value: str) -> str:
    """
    Render a value under the quoting policy.

    Example:
        >>> quote_value("My App")
        '"My App"'
        >>> quote_value("plain")
        'plain'
    """
    if not needs_quoting(value):
        return value

    escaped = value
    for char, replacement in ESCAPE_SEQUENCES:
        escaped = escaped.replace(char, replacement)
    return f'"{escaped}"'


def format_line(key: str, value: str, quote_values: bool = True) -> str:
    """Render a single KEY=VALUE line without its terminator."""
    rendered = quote_value(value) if quote_values else value
    return f"{key}={rendered}"


def render_export_set(export_set: ExportSet, quote_values: bool = True) -> str:
    """
    Render an export set as file content.

    Each entry becomes one newline-terminated line, in mapping order.
    An empty export set renders as an empty string.
    """
    return "".join(
        f"{format_line(key, value, quote_values)}\n"
        for key, value in export_set.items()
    )


def write_output(
    path: Union[str, Path],
    content: str,
    encoding: str = DEFAULT_ENCODING,
) -> None:
    """
    Write content to `path`, replacing any existing file.

    Content goes to a temporary file next to the destination which then
    replaces it, so a failed write leaves the previous file untouched.
    A symlinked destination has its target replaced, and the file keeps
    the mode of the file it replaces (a new file gets 0o666 & ~umask).

    Raises:
        ConfigurationError: If `encoding` is unknown
        WriteFailureError: If the file cannot be created or written
    """
    output_path = Path(path)
    target = output_path.resolve()
    tmp_name = None

    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ConfigurationError(
            f"Unknown output encoding: {encoding}",
            details={"encoding": encoding},
        ) from e

    try:
        mode = _target_mode(target)
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
        )
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as tmp_file:
            tmp_file.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
        tmp_name = None
    except (OSError, UnicodeEncodeError) as e:
        logger.error(
            f"Failed to write output file: {e}",
            path=str(output_path),
            run_id=current_run_id(),
        )
        raise WriteFailureError(
            f"Cannot write output file: {output_path}",
            details={"path": str(output_path), "reason": str(e)},
        ) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug(
        "Output file written",
        path=str(output_path),
        bytes=len(content.encode(encoding)),
        run_id=current_run_id(),
    )


def _target_mode(target: Path) -> int:
    """Permission bits for the replacement file."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
