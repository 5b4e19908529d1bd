"""EduAssist class analytics rollup service."""

__version__ = "1.0.0"
