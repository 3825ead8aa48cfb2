"""
Extraction and rewrite passes.

This package contains the pieces of the source-to-source transformation:
- Target-script detection and skip classification
- Placeholder messages for interpolated templates
- Per-file key registry, catalog injection and call-site rewriting
- Batch processing of source trees
"""
