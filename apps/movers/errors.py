"""Exceptions raised while proxying an upstream pricing API."""


class MoversError(Exception):
    """Base class for movers proxy errors."""


class UpstreamError(MoversError):
    """Upstream API error with status code and raw body"""
    def __init__(self, message: str, status_code: int = None, body=None,
                 content_type: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.content_type = content_type


class MissingCredentialError(MoversError):
    """Raised before any network call when an API key is not configured."""
    def __init__(self, env_name: str):
        super().__init__(f"{env_name} is not configured")
        self.env_name = env_name


class UnknownRevisionError(MoversError):
    def __init__(self, revision: str):
        super().__init__(f"No movers revision named '{revision}'")
        self.revision = revision
