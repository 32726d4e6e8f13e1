from typing import Any

from raptor.resources.paths import AUTO_LINK_SETTINGS
from raptor.schema.mapper import auto_link_settings_from_wire
from raptor.schema.models import AutoLinkSettings
from raptor.transport.base import BaseTransport
from raptor.validators import require_unit_interval


class AccountResource:
    """Account-level settings of the authenticated user."""

    def __init__(self, transport: BaseTransport) -> None:
        self._transport = transport

    def get_auto_link_settings(self) -> AutoLinkSettings:
        payload = self._transport.send(
            "GET", AUTO_LINK_SETTINGS, context="Get auto-link settings"
        )
        return auto_link_settings_from_wire(payload)

    def update_auto_link_settings(
        self,
        *,
        enabled: bool | None = None,
        threshold: float | None = None,
    ) -> AutoLinkSettings:
        """Partially update auto-link settings. Unset arguments are left unchanged."""
        body: dict[str, Any] = {}
        if enabled is not None:
            body["auto_link_enabled"] = enabled
        if threshold is not None:
            body["auto_link_threshold"] = require_unit_interval(threshold, "auto_link_threshold")
        payload = self._transport.send(
            "PATCH", AUTO_LINK_SETTINGS, context="Update auto-link settings", json_body=body
        )
        return auto_link_settings_from_wire(payload)
