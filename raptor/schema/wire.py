"""Helpers shared by the wire <-> client mappers."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from raptor.exceptions import MalformedResponseError

T = TypeVar("T")


def wire_mapping(label: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Turn missing keys and wrong shapes in a wire payload into MalformedResponseError."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(data: Any, *args: Any, **kwargs: Any) -> T:
            if not isinstance(data, dict):
                raise MalformedResponseError(
                    f"{label} payload must be an object, got {type(data).__name__}"
                )
            try:
                return func(data, *args, **kwargs)
            except KeyError as exc:
                raise MalformedResponseError(
                    f"{label} payload missing field {exc.args[0]!r}"
                ) from exc
            except (AttributeError, TypeError, ValueError) as exc:
                raise MalformedResponseError(f"{label} payload is malformed: {exc}") from exc

        return wrapper

    return decorator


def drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove keys whose value is None (optional wire fields that were absent)."""
    return {key: value for key, value in payload.items() if value is not None}


def optional_tuple(value: Any) -> tuple[Any, ...] | None:
    return tuple(value) if value is not None else None


def optional_list(value: tuple[Any, ...] | None) -> list[Any] | None:
    return list(value) if value is not None else None
