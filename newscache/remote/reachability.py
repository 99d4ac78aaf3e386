"""Point-of-use connectivity check."""

import socket
from typing import Optional
from urllib.parse import urlparse

from ..utils.logging import get_logger

logger = get_logger(__name__)


class Reachability:
    """Check whether the news API host accepts connections right now."""

    def __init__(
        self,
        url: str,
        timeout: float = 3.0,
        force_offline: bool = False,
    ) -> None:
        """
        Initialize reachability check.

        Args:
            url: Any URL on the host to probe
            timeout: Connect timeout in seconds
            force_offline: Report unavailable without probing
        """
        parsed = urlparse(url)
        self.host: Optional[str] = parsed.hostname
        self.port = parsed.port or (443 if parsed.scheme == "https" else 80)
        self.timeout = timeout
        self.force_offline = force_offline

    def is_available(self) -> bool:
        """Try a TCP connection to the API host."""
        if self.force_offline:
            return False
        if not self.host:
            return False

        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except (OSError, ValueError) as e:
            logger.debug("Host %s:%s unreachable: %s", self.host, self.port, e)
            return False
