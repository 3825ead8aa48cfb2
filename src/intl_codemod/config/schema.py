"""Configuration schema for intl-codemod using nested Pydantic models."""

import re
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

JS_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

CodepointRange = tuple[
    Annotated[int, Field(ge=0, le=0x10FFFF)],
    Annotated[int, Field(ge=0, le=0x10FFFF)],
]


class ConventionsConfig(BaseModel):
    """Names and module paths emitted into rewritten files."""

    runtime_name: str = Field(
        default="intl",
        description="Local name of the default-imported runtime object",
    )
    runtime_module: str = Field(
        default="@/locales",
        description="Module path the runtime object is default-imported from",
        min_length=1,
    )
    format_function: str = Field(
        default="formatMessage",
        description="Method called on the runtime object at every rewritten site",
    )
    builder_name: str = Field(
        default="defineMessages",
        description="Catalog-builder function imported by name",
    )
    builder_module: str = Field(
        default="react-intl",
        description="Module the catalog-builder function is imported from",
        min_length=1,
    )
    catalog_identifier: str = Field(
        default="intlMessages",
        description="Identifier bound to the per-file message catalog",
    )
    disable_marker: str = Field(
        default="i18n-disable",
        description="Comment token that excludes the following literal from extraction",
        min_length=1,
    )

    @field_validator(
        "runtime_name", "format_function", "builder_name", "catalog_identifier"
    )
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Validate that generated names are plain JavaScript identifiers."""
        if not JS_IDENTIFIER_PATTERN.match(v):
            raise ValueError(f"Not a valid JavaScript identifier: {v!r}")
        return v


class ScriptConfig(BaseModel):
    """Target script detection configuration."""

    ranges: list[CodepointRange] = Field(
        default_factory=lambda: [(0x4E00, 0x9FA5)],
        description="Inclusive codepoint ranges of the script to extract",
        min_length=1,
    )

    @field_validator("ranges")
    @classmethod
    def validate_ranges(cls, v: list[CodepointRange]) -> list[CodepointRange]:
        """Validate that every range is ordered."""
        for start, end in v:
            if start > end:
                raise ValueError(
                    f"Codepoint range start must not exceed end, got: {start:#x}-{end:#x}"
                )
        return v


class FilesConfig(BaseModel):
    """File discovery configuration for batch runs."""

    extensions: list[str] = Field(
        default_factory=lambda: [".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"],
        description="File suffixes to transform",
    )
    exclude_dirs: set[str] = Field(
        default_factory=lambda: {
            "node_modules",
            ".git",
            "dist",
            "build",
            "coverage",
            ".next",
            ".cache",
        },
        description="Directory names skipped while scanning",
    )

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Normalize suffixes to lowercase with a leading dot."""
        normalized: list[str] = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized


class CodemodConfig(BaseModel):
    """Top-level configuration for a codemod run."""

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    message_keys: list[str] | None = Field(
        default=None,
        alias="messageKeys",
        description="Optional cross-file accumulator that collected keys are appended to",
    )
    conventions: ConventionsConfig = Field(default_factory=ConventionsConfig)
    script: ScriptConfig = Field(default_factory=ScriptConfig)
    files: FilesConfig = Field(default_factory=FilesConfig)
