"""
Global test configuration fixtures for intl-codemod tests.

This module provides reusable pytest fixtures for creating CodemodConfig
instances and transformers configured for testing purposes.
"""

from __future__ import annotations

import pytest

from intl_codemod.config.schema import CodemodConfig, ConventionsConfig
from intl_codemod.transform.engine import IntlTransformer


@pytest.fixture
def default_config() -> CodemodConfig:
    """Configuration with every default convention."""
    return CodemodConfig()


@pytest.fixture
def custom_conventions_config() -> CodemodConfig:
    """Configuration emitting non-default names and module paths."""
    return CodemodConfig(
        conventions=ConventionsConfig(
            runtime_name="i18n",
            runtime_module="~/i18n",
            format_function="t",
            builder_name="defineMessages",
            builder_module="@formatjs/intl",
            catalog_identifier="messages",
            disable_marker="no-extract",
        )
    )


@pytest.fixture
def transformer(default_config: CodemodConfig) -> IntlTransformer:
    """Transformer using the default configuration."""
    return IntlTransformer(default_config)
