"""
Test utilities package for intl-codemod tests.

### test_helpers.py
- `parse_snippet()`: Parse a source snippet into a SourceTree
- `find_node()` / `find_nodes()`: Locate nodes by type and source text
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `write_source_tree()`: Write a mapping of relative paths to file contents

## Usage Examples

```python
from tests.utils.test_helpers import create_temp_config_file

with create_temp_config_file({"conventions": {"runtime_name": "i18n"}}) as config_path:
    # Use config_path for testing
    pass
```
"""

from __future__ import annotations

from .test_helpers import (
    create_temp_config_file,
    find_node,
    find_nodes,
    parse_snippet,
    write_source_tree,
)

__all__ = [
    "create_temp_config_file",
    "find_node",
    "find_nodes",
    "parse_snippet",
    "write_source_tree",
]
