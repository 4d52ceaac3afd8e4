"""Shared constants for urban-dict-cache."""

from __future__ import annotations

DEFAULT_BASE_URL = "http://api.urbandictionary.com/v0"

# One hour
DEFAULT_TTL_MS = 1000 * 60 * 60

DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

# Upstream endpoint names
RANDOM_ENDPOINT = "random"
DEFINE_ENDPOINT = "define"
AUTOCOMPLETE_ENDPOINT = "autocomplete-extra"
