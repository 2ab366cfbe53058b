"""Comment extraction exports."""

from .docstring_comments import collect_docstring_comments

__all__ = ["collect_docstring_comments"]
