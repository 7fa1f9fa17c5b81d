"""Error types raised by the client."""

from typing import Any


class OffClientError(Exception):
    """Root error for the client.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra context for logging.
    """

    default_code: str = "off_client_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class UnsupportedOperationError(OffClientError):
    """Operation is not meaningful for the targeted API version."""

    default_code = "unsupported_operation"

    def __init__(self, operation: str, version: str, message: str | None = None) -> None:
        super().__init__(
            message or f"{operation} is not supported by API {version}",
            detail={"operation": operation, "version": version},
        )
        self.operation = operation
        self.version = version
