"""Host header validation guarding against DNS rebinding."""

from __future__ import annotations

import logging

from awkit.config import AWConfig

logger = logging.getLogger(__name__)

_LOCAL_HOSTS = ("127.0.0.1", "localhost")


class HostCheck:
    """Rejects requests whose Host header does not name the local machine.

    Checking is only done when the server binds a local address.
    """

    def __init__(self, config: AWConfig) -> None:
        self.validate = config.address in _LOCAL_HOSTS
        if not self.validate:
            logger.warning("Host header validation is turned off, this is a security risk")

    def is_allowed(self, host_header: str | None) -> bool:
        """Tell whether a request with this Host header may proceed."""
        if not self.validate:
            return True
        if host_header is None:
            logger.info("Missing 'Host' header, denying request")
            return False
        host = host_header.split(":", 1)[0]
        if host not in _LOCAL_HOSTS:
            logger.info("Host header '%s' not allowed, denying request", host_header)
            return False
        return True