"""
Template parser for key-listing .env templates.

Reads a template file and turns its lines into candidate keys:
- blank lines and lines starting with '#' or ';' are ignored
- an optional leading 'export ' keyword is stripped
- the key is the trimmed text before the first '='
- lines without '=' or with an invalid key are skipped

Values are parsed only so that generated files can be read back;
the generator itself discards them.
"""

import codecs
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from ..config_constants import (
    COMMENT_PREFIXES,
    DEFAULT_ENCODING,
    EXPORT_PREFIX_PATTERN,
    UNESCAPE_MAP,
    VALID_KEY_PATTERN,
)
from ..domain.base_enums import LineKind
from ..domain.errors import ConfigurationError, TemplateNotFoundError
from ..domain.models import ParsedLine, TemplateLine
from ..utils.logging import get_module_logger
from ..utils.tracing import current_run_id


logger = get_module_logger()

_ESCAPE_PATTERN = re.compile(r"\\(.)", re.DOTALL)


def read_template(
    path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
) -> List[TemplateLine]:
    """
    Read a template file into numbered lines.

    The file is fully consumed and closed before returning.

    Args:
        path: Template file path
        encoding: Text encoding of the template

    Returns:
        List of TemplateLine in file order

    Raises:
        TemplateNotFoundError: If the file is missing, not a file,
            not readable or not decodable with `encoding`
        ConfigurationError: If `encoding` is unknown
    """
    template_path = Path(path)
    source_encoding = _source_encoding(encoding)

    try:
        with open(template_path, "r", encoding=source_encoding) as template_file:
            lines = [
                TemplateLine(line_number=number, raw=text.rstrip("\r\n"))
                for number, text in enumerate(template_file, start=1)
            ]
    except FileNotFoundError as e:
        raise TemplateNotFoundError(
            f"Template file not found: {template_path}",
            details={"path": str(template_path)},
        ) from e
    except (IsADirectoryError, PermissionError) as e:
        raise TemplateNotFoundError(
            f"Template file is not readable: {template_path}",
            details={"path": str(template_path), "reason": e.strerror},
        ) from e
    except UnicodeDecodeError as e:
        raise TemplateNotFoundError(
            f"Template file is not valid {encoding}: {template_path}",
            details={"path": str(template_path), "reason": e.reason},
        ) from e
    except OSError as e:
        raise TemplateNotFoundError(
            f"Template file could not be read: {template_path}",
            details={"path": str(template_path), "reason": e.strerror},
        ) from e

    logger.debug(
        "Template read",
        path=str(template_path),
        line_count=len(lines),
        run_id=current_run_id(),
    )
    return lines


def _source_encoding(encoding: str) -> str:
    """
    Codec used to decode a template.

    UTF-8 templates are read as utf-8-sig so a leading byte-order mark
    is not taken as part of the first key.
    """
    try:
        name = codecs.lookup(encoding).name
    except LookupError as e:
        raise ConfigurationError(
            f"Unknown template encoding: {encoding}",
            details={"encoding": encoding},
        ) from e
    return "utf-8-sig" if name == "utf-8" else encoding


def is_valid_key(key: str) -> bool:
    """Return True if `key` is a non-empty identifier not starting with a digit."""
    return bool(VALID_KEY_PATTERN.match(key))


def parse_value(text: str) -> str:
    """
    Parse the right-hand side of an assignment.

    Double-quoted values have backslash escapes decoded, single-quoted
    values are taken literally and bare values are trimmed.

    Example:
        >>> parse_value('"My \\"App\\""')
        'My "App"'
        >>> parse_value("  plain ")
        'plain'
    """
    value = text.strip()

    if len(value) >= 2 and value[0] == value[-1] == '"':
        return _ESCAPE_PATTERN.sub(_unescape, value[1:-1])

    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]

    return value


def _unescape(match: "re.Match[str]") -> str:
    char = match.group(1)
    # Unknown escapes are kept as written
    return UNESCAPE_MAP.get(char, match.group(0))


def classify_line(line: Union[str, TemplateLine], line_number: int = 1) -> ParsedLine:
    """
    Classify one template line.

    Args:
        line: Raw line text or a TemplateLine
        line_number: Used when `line` is plain text

    Returns:
        ParsedLine with key and value set for valid assignments
    """
    if isinstance(line, TemplateLine):
        line_number = line.line_number
        content = line.content
    else:
        content = line.strip()

    if not content:
        return ParsedLine(line_number=line_number, kind=LineKind.BLANK)

    if content.startswith(COMMENT_PREFIXES):
        return ParsedLine(line_number=line_number, kind=LineKind.COMMENT)

    content = EXPORT_PREFIX_PATTERN.sub("", content, count=1)

    key, separator, value = content.partition("=")
    key = key.strip()

    if not separator or not is_valid_key(key):
        return ParsedLine(line_number=line_number, kind=LineKind.MALFORMED)

    return ParsedLine(
        line_number=line_number,
        kind=LineKind.ASSIGNMENT,
        key=key,
        value=parse_value(value),
    )


def extract_key(line: Union[str, TemplateLine]) -> Optional[str]:
    """Return the candidate key of a single line, or None if it has none."""
    return classify_line(line).key


def parse_lines(lines: Iterable[Union[str, TemplateLine]]) -> Iterator[ParsedLine]:
    """
    Classify lines lazily, numbering plain strings from 1.
    """
    for number, line in enumerate(lines, start=1):
        parsed = classify_line(line, line_number=number)
        if parsed.kind == LineKind.MALFORMED:
            logger.debug(
                "Skipping malformed template line",
                line_number=parsed.line_number,
                run_id=current_run_id(),
            )
        yield parsed


def iter_candidate_keys(lines: Iterable[Union[str, TemplateLine]]) -> Iterator[str]:
    """
    Yield valid candidate keys in template order.

    Duplicates are yielded every time they appear. Each call starts a
    fresh pass over `lines`.
    """
    for parsed in parse_lines(lines):
        if parsed.is_assignment:
            yield parsed.key
