from __future__ import annotations

import logging

logger: logging.Logger = logging.getLogger("asgi-url")
