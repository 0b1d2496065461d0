from __future__ import annotations

BASE_ENCODING = "latin-1"
DEFAULT_CHARSET = "utf-8"

DEFAULT_HOST = "localhost"
DEFAULT_SCHEME = "http"

# The scope key used by CurrentURLMiddleware
SCOPE_KEY = "current_url"
