"""Exceptions raised inside the handle check tiers."""


class HandleCheckError(Exception):
    """Base exception for handle check errors."""

    pass


class ProviderError(HandleCheckError):
    """Verification provider returned an error."""

    def __init__(self, status_code: int, message: str, response_body: str = ""):
        self.status_code = status_code
        self.message = message
        self.response_body = response_body
        super().__init__(f"Provider error {status_code}: {message}")


class ConfigurationError(HandleCheckError):
    """Component not properly configured."""

    pass
