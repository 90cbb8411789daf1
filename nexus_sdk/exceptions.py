"""Public exceptions for the Nexus SDK."""


class NexusError(Exception):
    """Base exception for all Nexus SDK errors."""


class NexusAPIError(NexusError):
    """Error response (non-2xx) from the Nexus API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NexusConnectionError(NexusError):
    """Network failure or timeout while talking to the Nexus API."""


class NexusConfigError(NexusError):
    """Configuration error (missing environment, invalid settings)."""


class NexusValidationError(NexusError):
    """Response body did not have the expected shape."""


class _OperationError(NexusError):
    """Operation failure wrapping a lower-level error."""

    prefix = ""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(f"{self.prefix}: {message}" if self.prefix else message)
        self.status_code = status_code

    @classmethod
    def wrap(cls, error: Exception) -> "_OperationError":
        return cls(str(error), status_code=getattr(error, "status_code", None))


class CreateOrganizationError(_OperationError):
    """Creating an organization failed."""

    prefix = "CreateOrganizationError"


class FetchOrganizationError(_OperationError):
    """Fetching an organization failed."""

    prefix = "FetchOrganizationError"


class ListOrganizationsError(_OperationError):
    """Listing organizations through the project listing failed."""

    prefix = "ListOrganizationsError"
