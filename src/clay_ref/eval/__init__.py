"""Evaluator helper modules for the Clay runtime."""

__all__ = [
    "bind",
    "blocks",
    "common",
    "destructure",
    "expr",
    "fn",
    "literals",
]
