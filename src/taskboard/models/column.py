"""Column domain model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from .board import ColumnStats


def _validate_color(v: str) -> str:
    """Validate color is a valid named color or hex code."""
    if v.startswith("#"):
        hex_part = v[1:]
        if len(hex_part) not in (3, 6):
            raise ValueError("Hex color must be 3 or 6 characters (e.g., #fff or #ffffff)")
        if not all(c in "0123456789abcdefABCDEF" for c in hex_part):
            raise ValueError("Invalid hex color code")
    return v


class Column(BaseModel):
    """A board column. Edited by external forms; the core only groups by it."""

    model_config = {"frozen": True}

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    color: str = Field(default="white", description="Named color or hex code")
    description: str | None = None
    sort_order: int = 0

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate color is a valid named color or hex code."""
        return _validate_color(v)

    def accessible_label(self, stats: ColumnStats) -> str:
        """Region label announced when the column receives focus."""
        label = (
            f"Column {self.name}. {stats.task_count} tasks, "
            f"{stats.completed_count} completed."
        )
        if self.description:
            label += f" {self.description}"
        return label
