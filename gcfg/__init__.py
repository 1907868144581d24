"""Tokenizer, source positions, value parsers and errors for git-config style text."""

__version__ = "2.0.0"

__all__ = ["errors", "position", "scanner", "token", "values"]