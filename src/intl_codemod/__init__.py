"""
intl-codemod - Extract Chinese UI text into react-intl message catalogs.
"""

from .config.schema import CodemodConfig
from .transform.batch import BatchResult, transform_paths
from .transform.engine import IntlCodemod, IntlTransformer, transform_source
from .transform.types import TransformResult

__all__ = [
    "BatchResult",
    "CodemodConfig",
    "IntlCodemod",
    "IntlTransformer",
    "TransformResult",
    "transform_paths",
    "transform_source",
]
