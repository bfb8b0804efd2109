"""Federate IAM user credentials with STS GetFederationToken."""

from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from awsconsole.credentials import Credentials
from awsconsole.errors import FederationError
from awsconsole.utils import logger

# GetFederationToken rejects DurationSeconds below 15 minutes.
MIN_DURATION_SECONDS = 15 * 60


def get_sts_client(creds: Credentials, region: str, user_agent: str):
    """Get an STS client for the given credentials that sends user_agent."""
    session = boto3.Session(
        aws_access_key_id=creds.access_key_id,
        aws_secret_access_key=creds.secret_access_key,
        aws_session_token=creds.session_token or None,
        region_name=region or None,
    )
    return session.client("sts", config=Config(user_agent=user_agent))


def federation_duration(duration: int) -> Optional[int]:
    """DurationSeconds to request, or None to leave it to the API default."""
    if duration == 0:
        return None
    return max(duration, MIN_DURATION_SECONDS)


def federate_user(
    creds: Credentials,
    region: str,
    name: str,
    policy_arn: str,
    duration: int = 0,
    user_agent: str = "",
    client=None,
) -> Credentials:
    """
    Federate IAM user credentials into a temporary session.

    AWS refuses to issue console signin tokens for long-lived IAM user
    credentials, so they are exchanged for federated credentials scoped to a
    single managed policy. Credentials that already carry a session token are
    returned unchanged without calling STS.

    Args:
        creds: Credentials to federate
        region: AWS region for the STS client
        name: Name of the federated user session
        policy_arn: ARN of the managed policy attached to the session
        duration: Session duration in seconds, 0 for the API default
        user_agent: User agent sent with the STS request
        client: Optional STS client, built from creds when omitted

    Returns:
        Temporary credentials

    Raises:
        FederationError: If the GetFederationToken call fails
    """
    if creds.is_temporary:
        logger.debug("Credentials are already temporary, skipping federation")
        return creds

    params = {
        "Name": name,
        "PolicyArns": [{"arn": policy_arn}],
    }
    duration_seconds = federation_duration(duration)
    if duration_seconds is not None:
        params["DurationSeconds"] = duration_seconds

    logger.debug(
        f"Requesting federation token '{name}' with policy {policy_arn} "
        f"(duration: {duration_seconds or 'default'})"
    )

    if client is None:
        client = get_sts_client(creds, region, user_agent)

    try:
        response = client.get_federation_token(**params)
    except ClientError as e:
        error = e.response.get("Error", {})
        raise FederationError(
            f"GetFederationToken failed: {e}",
            status=e.response.get("ResponseMetadata", {}).get("HTTPStatusCode"),
            body=error.get("Message"),
        ) from e
    except BotoCoreError as e:
        raise FederationError(f"GetFederationToken failed: {e}") from e

    result = response["Credentials"]
    return Credentials(
        access_key_id=result["AccessKeyId"],
        secret_access_key=result["SecretAccessKey"],
        session_token=result["SessionToken"],
    )
