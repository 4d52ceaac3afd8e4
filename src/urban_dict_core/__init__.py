"""Core types, settings and interfaces for urban-dict-cache."""
