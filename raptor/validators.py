"""Input checks that run before any request is issued."""

import ipaddress
import re
from urllib.parse import urlparse

from raptor.exceptions import ValidationError

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

_LOCAL_HOSTNAMES = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})


def is_valid_uuid(value: str) -> bool:
    return bool(value) and UUID_PATTERN.match(value) is not None


def require_uuid(value: str, label: str = "document ID") -> str:
    """Return the trimmed UUID or raise ValidationError."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label[0].upper()}{label[1:]} is required")
    candidate = value.strip()
    if not is_valid_uuid(candidate):
        raise ValidationError(f"Invalid {label}: {value}. Expected UUID format.")
    return candidate


def require_unit_interval(value: float, label: str) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{label} must be between 0.0 and 1.0, got {value}")
    return value


def require_version_number(version_number: int) -> int:
    if version_number < 1:
        raise ValidationError("Version number must be >= 1")
    return version_number


def require_pagination(limit: int, offset: int, max_limit: int = 100) -> None:
    if limit < 1 or limit > max_limit:
        raise ValidationError(f"Limit must be between 1 and {max_limit}")
    if offset < 0:
        raise ValidationError("Offset must be non-negative")


def require_api_key(api_key: str) -> str:
    if not api_key or not api_key.strip():
        raise ValidationError("API key is required")
    return api_key


def is_private_host(hostname: str) -> bool:
    """True for localhost names, loopback and RFC 1918 private addresses."""
    host = hostname.lower()
    if host in _LOCAL_HOSTNAMES:
        return True
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    return address.is_loopback or address.is_private


def normalize_base_url(base_url: str, allow_localhost: bool = False) -> str:
    """Strip the trailing slash and reject unsafe or malformed base URLs.

    Raises:
        ValidationError: if the URL is malformed, not http(s), or points at a
            local/private host while ``allow_localhost`` is False.
    """
    candidate = (base_url or "").strip().rstrip("/")
    if not candidate:
        raise ValidationError("Invalid base URL: empty value")
    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
    except ValueError as exc:
        raise ValidationError(f"Invalid base URL: {exc}") from exc
    if parsed.scheme not in ("http", "https"):
        raise ValidationError("Base URL must use HTTP or HTTPS protocol")
    if not hostname:
        raise ValidationError(f"Invalid base URL: missing host in {base_url!r}")
    if is_private_host(hostname) and not allow_localhost:
        raise ValidationError(
            "Base URL cannot point to localhost or private IP addresses. "
            "For local development, set dangerously_allow_localhost=True."
        )
    return candidate
