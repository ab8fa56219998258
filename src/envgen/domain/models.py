"""
Domain models for template parsing and file generation.

These models carry template lines through the parser and
summarize the outcome of a single generate run.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional
from .base_enums import LineKind


class TemplateLine(BaseModel):
    """A single line read from a template file."""

    line_number: int = Field(..., ge=1, description="1-based line number, for diagnostics")
    raw: str = Field(..., description="Line text without the line terminator")

    @property
    def content(self) -> str:
        """Line text with surrounding whitespace trimmed."""
        return self.raw.strip()


class ParsedLine(BaseModel):
    """Classification of one template line."""

    line_number: int = Field(..., ge=1, description="1-based line number")
    kind: LineKind = Field(..., description="What the line turned out to be")
    key: Optional[str] = Field(default=None, description="Candidate key, set for assignments")
    value: Optional[str] = Field(
        default=None,
        description="Unquoted right-hand side, set for assignments"
    )

    @property
    def is_assignment(self) -> bool:
        return self.kind == LineKind.ASSIGNMENT


class GenerationReport(BaseModel):
    """Outcome of one generate run."""

    template_path: str = Field(..., description="Template file that was read")
    output_path: str = Field(..., description="Destination file")
    run_id: str = Field(..., description="Identifier bound into this run's log events")

    # Results
    entries: Dict[str, str] = Field(
        default_factory=dict,
        description="Export set in template order"
    )
    written: bool = Field(default=False, description="False in report-only mode")

    # Counters
    candidate_count: int = Field(default=0, description="Distinct valid keys in the template")
    missing_count: int = Field(default=0, description="Distinct valid keys absent from the environment")
    skipped_lines: int = Field(default=0, description="Malformed template lines")

    @property
    def exported_count(self) -> int:
        return len(self.entries)
