"""Configuration models describing sitepager settings."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

DIRECTORY_PLACEHOLDER = ":directory"
NUMBER_PLACEHOLDER = ":num"


class SitepagerBaseModel(BaseModel):
    """Shared configuration for sitepager Pydantic models."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PaginationOptions(SitepagerBaseModel):
    """Options controlling a single pagination pass.

    Field names follow Python conventions; the camelCase spellings used by
    site build scripts (``perPage``, ``sortBy``...) are accepted as aliases.

    Attributes:
        directory: Directory whose entries are paginated.
        per_page: Number of entries per page.
        sort_by: Dotted metadata path used to order entries.
        reverse: Whether to sort newest-first.
        output_dir: Pattern for page directories using ``:directory`` and ``:num``.
        index_layout: Layout identifier assigned to generated index records.
        first_index_file: Existing record that acts as the first page.
        use_permalinks: Whether to emit permalink-style (directory) URLs.
    """

    directory: str = Field(default="blog", min_length=1)
    per_page: int = Field(default=10, gt=0, alias="perPage")
    sort_by: str = Field(default="date", min_length=1, alias="sortBy")
    reverse: bool = True
    output_dir: str = Field(default=":directory/:num", alias="outputDir")
    index_layout: str = Field(default="blog-index.njk", alias="indexLayout")
    first_index_file: str = Field(default="blog.md", alias="firstIndexFile")
    use_permalinks: bool = Field(default=True, alias="usePermalinks")

    @field_validator("output_dir")
    @classmethod
    def _require_page_number(cls, value: str) -> str:
        if NUMBER_PLACEHOLDER not in value:
            raise ValueError(
                f"output pattern {value!r} must contain the {NUMBER_PLACEHOLDER} placeholder"
            )
        return value

    @classmethod
    def field_name(cls, key: str) -> str:
        """Return the field name for ``key``, which may be a camelCase alias."""
        for name, info in cls.model_fields.items():
            if key == info.alias:
                return name
        return key

    @classmethod
    def canonical_keys(cls, values: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``values`` keyed by field name so aliases and names merge."""
        return {cls.field_name(key): value for key, value in values.items()}


class LoggingSettings(SitepagerBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(SitepagerBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class SitepagerConfig(SitepagerBaseModel):
    """Top-level configuration struct for sitepager.

    Attributes:
        pagination: Default pagination options.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    pagination: PaginationOptions = Field(default_factory=PaginationOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DIRECTORY_PLACEHOLDER",
    "NUMBER_PLACEHOLDER",
    "SitepagerBaseModel",
    "PaginationOptions",
    "LoggingSettings",
    "CLIOptions",
    "SitepagerConfig",
]
