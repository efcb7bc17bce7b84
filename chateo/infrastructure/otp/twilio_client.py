import threading
import logging
from typing import Optional
from twilio.rest import Client
from twilio.http.http_client import TwilioHttpClient

from ...core.config import settings, ConfigurationError

logger = logging.getLogger(__name__)

_client: Optional[Client] = None
_client_lock = threading.Lock()


def get_twilio_client() -> Client:
    """Process-wide Twilio client, built once on first use."""
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                if not settings.TWILIO_ACCOUNT_SID or not settings.TWILIO_AUTH_TOKEN:
                    raise ConfigurationError("Missing Twilio credentials")
                http_client = TwilioHttpClient(
                    timeout=settings.TWILIO_TIMEOUT_SECONDS,
                    max_retries=settings.TWILIO_MAX_RETRIES,
                )
                _client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN, http_client=http_client)
                logger.info("Twilio client initialized")
    return _client


def reset_twilio_client() -> None:
    global _client
    with _client_lock:
        _client = None
