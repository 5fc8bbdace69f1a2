"""Configuration models for the display layer.

These mirror the tables of ``config.toml``. Every key is optional in the
file; missing keys fall back to the defaults below.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TableConfig(BaseModel):
    """Table rendering configuration (box drawing characters)."""

    model_config = ConfigDict(extra="forbid")

    separate_columns: bool = Field(default=True)
    separate_rows: bool = Field(default=False)

    horizontal: str = Field(default="─")
    vertical: str = Field(default="│")
    up_horizontal: str = Field(default="┴")
    down_horizontal: str = Field(default="┬")
    vertical_right: str = Field(default="├")
    vertical_left: str = Field(default="┤")
    vertical_horizontal: str = Field(default="┼")
    down_right: str = Field(default="┌")
    down_left: str = Field(default="┐")
    up_right: str = Field(default="└")
    up_left: str = Field(default="┘")

    @field_validator(
        "horizontal",
        "vertical",
        "up_horizontal",
        "down_horizontal",
        "vertical_right",
        "vertical_left",
        "vertical_horizontal",
        "down_right",
        "down_left",
        "up_right",
        "up_left",
    )
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"expected a single character, got {value!r}")
        return value


class ListConfig(BaseModel):
    """List command configuration."""

    model_config = ConfigDict(extra="forbid")

    default_verbose: bool = Field(default=False)


class AppConfig(BaseModel):
    """Main configuration."""

    table: TableConfig = Field(default_factory=TableConfig)
    list: ListConfig = Field(default_factory=ListConfig)
