"""Tests for configuration schema validation."""

import pytest
from pydantic import ValidationError

from intl_codemod.config.schema import (
    CodemodConfig,
    ConventionsConfig,
    FilesConfig,
    ScriptConfig,
)


class TestConventionsConfig:
    """Test cases for emitted names and module paths."""

    def test_defaults(self) -> None:
        """Test the default react-intl conventions."""
        conventions = ConventionsConfig()

        assert conventions.runtime_name == "intl"
        assert conventions.runtime_module == "@/locales"
        assert conventions.format_function == "formatMessage"
        assert conventions.builder_name == "defineMessages"
        assert conventions.builder_module == "react-intl"
        assert conventions.catalog_identifier == "intlMessages"
        assert conventions.disable_marker == "i18n-disable"

    @pytest.mark.parametrize(
        "field", ["runtime_name", "format_function", "builder_name", "catalog_identifier"]
    )
    @pytest.mark.parametrize("value", ["", "1abc", "my-name", "a b"])
    def test_invalid_identifiers(self, field: str, value: str) -> None:
        """Test that generated names must be JavaScript identifiers."""
        with pytest.raises(ValidationError):
            _ = ConventionsConfig.model_validate({field: value})

    @pytest.mark.parametrize("value", ["$t", "_intl", "i18n"])
    def test_valid_identifiers(self, value: str) -> None:
        """Test that dollar signs, underscores and digits are accepted."""
        conventions = ConventionsConfig(runtime_name=value)
        assert conventions.runtime_name == value

    def test_empty_module_rejected(self) -> None:
        """Test that module paths cannot be empty."""
        with pytest.raises(ValidationError):
            _ = ConventionsConfig(runtime_module="")


class TestScriptConfig:
    """Test cases for target-script ranges."""

    def test_default_range(self) -> None:
        """Test the default CJK Unified Ideographs range."""
        assert ScriptConfig().ranges == [(0x4E00, 0x9FA5)]

    def test_reversed_range_rejected(self) -> None:
        """Test that range start must not exceed range end."""
        with pytest.raises(ValidationError) as exc_info:
            _ = ScriptConfig(ranges=[(0x9FA5, 0x4E00)])

        assert "must not exceed" in str(exc_info.value)

    def test_out_of_unicode_rejected(self) -> None:
        """Test that codepoints beyond U+10FFFF are rejected."""
        with pytest.raises(ValidationError):
            _ = ScriptConfig(ranges=[(0, 0x110000)])

    def test_empty_ranges_rejected(self) -> None:
        """Test that at least one range is required."""
        with pytest.raises(ValidationError):
            _ = ScriptConfig(ranges=[])


class TestFilesConfig:
    """Test cases for file discovery settings."""

    def test_extensions_normalized(self) -> None:
        """Test that extensions gain a leading dot and lose their case."""
        files = FilesConfig(extensions=["TS", ".Vue", " jsx ", ""])

        assert files.extensions == [".ts", ".vue", ".jsx"]

    def test_default_excludes(self) -> None:
        """Test that dependency and build folders are excluded by default."""
        files = FilesConfig()

        assert "node_modules" in files.exclude_dirs
        assert "dist" in files.exclude_dirs


class TestCodemodConfig:
    """Test cases for the top-level configuration."""

    def test_message_keys_alias(self) -> None:
        """Test that the accumulator accepts its camelCase name."""
        config = CodemodConfig.model_validate({"messageKeys": ["已有"]})

        assert config.message_keys == ["已有"]

    def test_message_keys_field_name(self) -> None:
        """Test that the accumulator also accepts its field name."""
        config = CodemodConfig.model_validate({"message_keys": []})

        assert config.message_keys == []

    def test_nested_sections(self) -> None:
        """Test loading nested sections from a plain mapping."""
        config = CodemodConfig.model_validate(
            {
                "conventions": {"runtime_name": "i18n"},
                "script": {"ranges": [[0x3040, 0x309F]]},
            }
        )

        assert config.message_keys is None
        assert config.conventions.runtime_name == "i18n"
        assert config.script.ranges == [(0x3040, 0x309F)]
