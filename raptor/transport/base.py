from abc import ABC, abstractmethod
from typing import Any


class BaseTransport(ABC):
    """Contract for authenticated request adapters."""

    @abstractmethod
    def send(
        self,
        method: str,
        path: str,
        *,
        context: str,
        data: dict[str, str] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        json_body: dict[str, Any] | None = None,
        query: dict[str, str] | None = None,
        expect_body: bool = True,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            method: HTTP verb.
            path: Path below the base URL, starting with "/".
            context: Short description of the operation, used in error messages.
            expect_body: When False the response body is not decoded and None
                is returned.

        Raises:
            NetworkError: on transport-level failure.
            APIError: on a non-2xx status.
            MalformedResponseError: when a 2xx body cannot be decoded.
        """

    def close(self) -> None:
        """Release underlying connections."""
