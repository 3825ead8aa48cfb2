"""Configuration models and loading."""

from .manager import ConfigManager
from .schema import CodemodConfig, ConventionsConfig, FilesConfig, ScriptConfig

__all__ = [
    "CodemodConfig",
    "ConfigManager",
    "ConventionsConfig",
    "FilesConfig",
    "ScriptConfig",
]
