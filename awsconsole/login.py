"""AWS console login url generation pipeline."""

import sys
from typing import IO, Optional

from awsconsole.aliases import AliasResolver
from awsconsole.console import generate_login_url
from awsconsole.credentials import from_profile, from_reader
from awsconsole.errors import AliasUnresolvedError
from awsconsole.federation import federate_user
from awsconsole.partition import get_partition_info
from awsconsole.utils import logger

STDIN_PROFILE = "-"
DEFAULT_REGION = "us-east-1"


def generate_console_url(
    profile: Optional[str] = None,
    region: Optional[str] = None,
    duration: int = 0,
    location: str = "home",
    policy: str = "admin",
    name: str = "aws-console",
    user_agent: str = "",
    resolver: Optional[AliasResolver] = None,
    stdin: Optional[IO] = None,
) -> str:
    """
    Generate an AWS console login url.

    Args:
        profile: AWS CLI profile name, "-" to read credential JSON from stdin
        region: Preferred console region, overrides the profile's region
        duration: Console session duration in seconds, 0 for the default
        location: Location alias or https url to land on after logging in
        policy: Policy alias or ARN attached when federating an IAM user
        name: Name of the federated user session
        user_agent: User agent for STS and federation requests
        resolver: Alias tables, the built-in ones when omitted
        stdin: Stream to read credential JSON from, sys.stdin when omitted

    Returns:
        The login url

    Raises:
        AWSConsoleError: If any step of the pipeline fails
    """
    if resolver is None:
        resolver = AliasResolver.default()

    if profile == STDIN_PROFILE:
        logger.debug("Reading credentials from stdin")
        creds = from_reader(stdin if stdin is not None else sys.stdin)
        profile_region = ""
    else:
        creds, profile_region = from_profile(profile)

    # --region, then the profile's region, then us-east-1.
    region = region or profile_region or DEFAULT_REGION

    partition = get_partition_info(region)

    # User credentials must be federated before a login url can be generated.
    policy_arn = resolver.resolve_policy(policy, partition.partition_id)
    creds = federate_user(creds, region, name, policy_arn, duration, user_agent)

    destination, found = resolver.resolve_location(
        location, partition.console_domain, region
    )
    if not found:
        raise AliasUnresolvedError(location)

    logger.debug(f"Redirecting to {destination}")
    return generate_login_url(
        creds, duration, destination, user_agent, partition.federation_endpoint
    )
