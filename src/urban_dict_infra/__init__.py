"""Infrastructure adapters for urban-dict-cache."""
