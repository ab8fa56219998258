import re
from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    # Human-readable single line per event
    CONSOLE = "console"
    # Indented JSON per event, for log collectors
    JSON = "json"


SETTINGS_ENV_PREFIX = "ENVGEN_"

DEFAULT_ENCODING = "utf-8"

# -------------------------
# Template Syntax Constants
# -------------------------

COMMENT_PREFIXES = ("#", ";")

# "export" keyword followed by at least one whitespace character
EXPORT_PREFIX_PATTERN = re.compile(r"^export\s+")

# Letters, digits and underscore, not starting with a digit
VALID_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# -------------------------
# Output Quoting Constants
# -------------------------

# Characters (besides whitespace) that force a value into double quotes
QUOTE_TRIGGER_CHARS = frozenset("=\"'\\#`$")

# Applied in order when quoting; backslash must come first
ESCAPE_SEQUENCES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)

UNESCAPE_MAP = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
