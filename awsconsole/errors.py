"""Exceptions raised by the login url pipeline."""

from typing import Optional


class AWSConsoleError(Exception):
    """Base class for every failure the pipeline can report."""


class ConfigError(AWSConsoleError):
    """A profile, config file or credential source could not be used."""


class ParseError(AWSConsoleError):
    """Piped credential JSON did not match any supported shape."""


class PartitionUnresolvedError(AWSConsoleError):
    """The region maps to a partition with no known console endpoints."""

    def __init__(self, region: str, partition: Optional[str] = None):
        self.region = region
        self.partition = partition
        super().__init__(
            f"could not resolve console endpoints for region {region!r}"
            + (f" (partition {partition!r})" if partition else "")
        )


class AliasUnresolvedError(AWSConsoleError):
    """A location alias is neither a known alias nor a https url."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"could not resolve location {alias!r}")


class RemoteAPIError(AWSConsoleError):
    """A remote call failed.

    ``status`` is the HTTP status code when one was received and ``body`` the
    raw response body or service error message.
    """

    def __init__(
        self, message: str, status: Optional[int] = None, body: Optional[str] = None
    ):
        self.status = status
        self.body = body
        super().__init__(message)


class FederationError(RemoteAPIError):
    """STS GetFederationToken failed."""


class SigninTokenError(RemoteAPIError):
    """The federation endpoint did not return a signin token."""
