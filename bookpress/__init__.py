"""Book layout and archive export.

Packages:
- bookpress.render: text metrics and greedy line wrapping
- bookpress.layout: page cursor and document layout engine
- bookpress.docs: document model, metadata and output formats
- bookpress.archive: ZIP bundling and file naming
- bookpress.pipeline: `export_book`, the one-call export
"""

__version__ = "0.1.0"
