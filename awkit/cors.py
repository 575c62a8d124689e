"""Cross-origin policy of the HTTP server."""

from __future__ import annotations

import re
from dataclasses import dataclass

from awkit.config import AWConfig

_WEB_EXTENSION_ORIGIN = "chrome-extension://nglaklhklhcoonedhgnpgddginnjdadi"
# Every version of a Mozilla extension has its own id, so all of them are let in.
_MOZ_EXTENSIONS = "moz-extension://.*"
_ANY_CHROME_EXTENSION = "chrome-extension://.*"
_TESTING_ORIGINS = ("http://127.0.0.1:27180", "http://localhost:27180")


@dataclass(frozen=True)
class CorsPolicy:
    """Which origins and methods may make cross-origin requests."""

    exact_origins: tuple[str, ...]
    regex_origins: tuple[str, ...]
    methods: frozenset[str] = frozenset({"GET", "POST", "DELETE"})
    allow_credentials: bool = False
    allow_all_headers: bool = True

    def allows_origin(self, origin: str) -> bool:
        """Tell whether ``origin`` matches an exact origin or one of the patterns."""
        if origin in self.exact_origins:
            return True
        return any(re.search(pattern, origin) for pattern in self.regex_origins)

    def allows_method(self, method: str) -> bool:
        """Tell whether cross-origin requests may use ``method``."""
        return method.upper() in self.methods


def cors_policy(config: AWConfig) -> CorsPolicy:
    """Build the policy for a server running with ``config``."""
    exact = [
        f"http://127.0.0.1:{config.port}",
        f"http://localhost:{config.port}",
        *config.cors,
    ]
    if config.testing:
        exact.extend(_TESTING_ORIGINS)
    patterns = [_WEB_EXTENSION_ORIGIN, _MOZ_EXTENSIONS]
    if config.testing:
        patterns.append(_ANY_CHROME_EXTENSION)
    for pattern in patterns:
        re.compile(pattern)
    return CorsPolicy(exact_origins=tuple(exact), regex_origins=tuple(patterns))