from raptor.config.settings import Settings
from raptor.logging.logger import Log
from raptor.transport.base import BaseTransport
from raptor.transport.http_transport import HttpTransport
from raptor.validators import normalize_base_url, require_api_key


class TransportFactory:
    """Creates the configured transport after validating credentials and base URL."""

    @classmethod
    def create(cls, settings: Settings) -> BaseTransport:
        api_key = require_api_key(settings.api_key)
        base_url = normalize_base_url(
            settings.base_url,
            allow_localhost=settings.dangerously_allow_localhost,
        )
        if settings.dangerously_allow_localhost:
            Log.warning(
                "dangerously_allow_localhost is enabled. "
                "Use it only for local development and testing."
            )
        return HttpTransport(
            api_key=api_key,
            base_url=base_url,
            timeout_seconds=settings.timeout_seconds,
        )
