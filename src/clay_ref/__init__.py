"""Clay reference interpreter: a tree-walking evaluator over lowered syntax trees."""

__version__ = "0.0.1"
