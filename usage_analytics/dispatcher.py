"""
Ping Dispatcher

Posts an encoded payload to the analytics collector in a background thread.
Delivery is best effort: failures are logged at debug level and dropped.
"""

import http.client
import logging
import ssl
import threading
import urllib.error
import urllib.parse
import urllib.request
from typing import Sequence, Tuple

import certifi

logger = logging.getLogger(__name__)

ANALYTICS_URL = "https://ssl.google-analytics.com/collect"
TIMEOUT_SECONDS = 5

# CA bundle from certifi rather than the system store
SSL_CONTEXT = ssl.create_default_context(cafile=certifi.where())


class NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Surface 3xx replies as HTTPError instead of re-sending the ping"""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


OPENER = urllib.request.build_opener(
    NoRedirectHandler(),
    urllib.request.HTTPSHandler(context=SSL_CONTEXT),
)


class PingDispatcher:
    """Fire-and-forget HTTP sender for usage pings"""

    def __init__(self, user_agent: str, url: str = ANALYTICS_URL, timeout: float = TIMEOUT_SECONDS):
        """
        Initialize dispatcher

        Args:
            user_agent: User-Agent header sent with every ping
            url: Collector URL
            timeout: Socket timeout in seconds
        """
        self.user_agent = user_agent
        self.url = url
        self.timeout = timeout

    def send(self, payload: Sequence[Tuple[str, str]], background: bool = True) -> None:
        """
        Send one ping

        Args:
            payload: Ordered form fields
            background: If True, send in a new daemon thread (non-blocking)
        """
        if background:
            thread = threading.Thread(
                target=self._post,
                args=(list(payload),),
                name="usage-analytics-ping",
                daemon=True,
            )
            thread.start()
        else:
            self._post(payload)

    def _post(self, payload: Sequence[Tuple[str, str]]) -> bool:
        """POST the payload; returns True on a 2xx response, never raises"""
        try:
            body = urllib.parse.urlencode(payload).encode("utf-8")
            req = urllib.request.Request(
                self.url,
                data=body,
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "User-Agent": self.user_agent,
                },
                method="POST",
            )
            with OPENER.open(req, timeout=self.timeout) as response:
                if response.status >= 300:
                    logger.debug("Non 200 status code : %s - %s", response.status, response.reason)
                    return False
                return True

        except urllib.error.HTTPError as e:
            logger.debug("Non 200 status code : %s - %s", e.code, e.reason)
            if e.fp is not None:
                e.close()
            return False
        except urllib.error.URLError as e:
            logger.debug("Connection error during analytics ping: %s", e.reason)
            return False
        except (OSError, http.client.HTTPException, ValueError) as e:
            logger.debug("Error during analytics ping: %s", e)
            return False
