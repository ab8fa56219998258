from enum import Enum


class LineKind(str, Enum):
    BLANK = "blank"
    COMMENT = "comment"
    ASSIGNMENT = "assignment"
    # Neither blank, comment nor a valid KEY=VALUE line; skipped
    MALFORMED = "malformed"
