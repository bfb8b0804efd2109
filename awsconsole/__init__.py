"""
aws-console: generate temporary login URLs for the AWS Console.

Credentials come from an AWS CLI profile or from JSON piped on stdin. IAM user
credentials are federated with STS GetFederationToken first, then exchanged
at the partition's federation endpoint for a signin token.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .aliases import AliasResolver
from .console import generate_login_url
from .credentials import Credentials, from_profile, from_reader, from_stream
from .errors import (
    AliasUnresolvedError,
    AWSConsoleError,
    ConfigError,
    FederationError,
    ParseError,
    PartitionUnresolvedError,
    RemoteAPIError,
    SigninTokenError,
)
from .federation import federate_user
from .login import generate_console_url
from .partition import PartitionInfo, get_partition_info, resolve_region_partition

__all__ = [
    # Pipeline
    "generate_console_url",
    # Components
    "AliasResolver",
    "Credentials",
    "PartitionInfo",
    "federate_user",
    "from_profile",
    "from_reader",
    "from_stream",
    "generate_login_url",
    "get_partition_info",
    "resolve_region_partition",
    # Errors
    "AWSConsoleError",
    "AliasUnresolvedError",
    "ConfigError",
    "FederationError",
    "ParseError",
    "PartitionUnresolvedError",
    "RemoteAPIError",
    "SigninTokenError",
]
