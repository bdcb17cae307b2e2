class ToolParamsError(Exception):
    """Base exception for tool-params"""

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class CallerContractError(ToolParamsError, ValueError):
    """
    Raised when the invoking code breaks the calling contract (e.g. a blank
    parameter name or required identifier). Never turned into a validation
    message: it cannot be fixed by changing request parameters.
    """

    def __init__(self, message: str):
        super().__init__(message, error_code="CALLER_CONTRACT_VIOLATION")


class ResourceNotFoundError(ToolParamsError):
    """Raised by a data-fetch collaborator when the requested resource does not exist"""

    def __init__(self, message: str):
        super().__init__(message, error_code="RESOURCE_NOT_FOUND")


class UnauthorizedError(ToolParamsError):
    """Raised by a data-fetch collaborator when credentials are rejected"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, error_code="UNAUTHORIZED")


class UpstreamServiceError(ToolParamsError):
    """Raised by a data-fetch collaborator when the backing API answers with an HTTP error"""

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message, error_code="UPSTREAM_SERVICE_ERROR")


def require_identifier(value: str | None, name: str) -> str:
    """Return ``value`` stripped, or raise CallerContractError when blank."""
    if value is None or not value.strip():
        raise CallerContractError(f"{name} cannot be null or blank")
    return value.strip()
