"""Command-line interface for urban-dict-cache."""
