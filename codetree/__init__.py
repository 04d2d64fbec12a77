"""codetree: project tree, code statistics and file dump reports."""

__version__ = "1.0.0"
