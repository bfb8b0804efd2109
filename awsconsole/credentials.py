"""Retrieve AWS credentials from a profile or from piped JSON."""

from typing import IO, Optional, Tuple, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from awsconsole.errors import ConfigError, ParseError
from awsconsole.utils import logger


class Credentials(BaseModel):
    """
    A set of AWS access credentials.

    An empty session_token means long-lived IAM user credentials, anything
    else means temporary (role or federated) credentials.
    """

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    secret_access_key: str
    session_token: str = ""

    @property
    def is_temporary(self) -> bool:
        return self.session_token != ""

    def __repr__(self) -> str:
        return (
            f"Credentials(access_key_id={self.access_key_id!r}, "
            f"temporary={self.is_temporary})"
        )

    __str__ = __repr__


class CredentialProcessResponse(BaseModel):
    """
    Flat credential document, as printed by credential_process plugins:

        {"Version": 1, "AccessKeyId": "...", "SecretAccessKey": "...",
         "SessionToken": "...", "Expiration": "..."}
    """

    access_key_id: str = Field(default="", alias="AccessKeyId")
    secret_access_key: str = Field(default="", alias="SecretAccessKey")
    session_token: Optional[str] = Field(default=None, alias="SessionToken")

    def is_complete(self) -> bool:
        return self.access_key_id != "" and self.secret_access_key != ""

    def to_credentials(self) -> Credentials:
        return Credentials(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token or "",
        )


class STSCredentialsResponse(BaseModel):
    """
    Nested credential document, as printed by sts assume-role,
    get-session-token and friends:

        {"AssumedRoleUser": {...}, "Credentials": {"AccessKeyId": "...", ...}}
    """

    credentials: CredentialProcessResponse = Field(
        default_factory=CredentialProcessResponse, alias="Credentials"
    )


def from_profile(profile_name: Optional[str] = None) -> Tuple[Credentials, str]:
    """
    Retrieve credentials from the AWS cli config files.

    Typically ~/.aws/credentials and ~/.aws/config. Credentials for the named
    profile are returned, or the default profile ($AWS_PROFILE when set) if
    no name is given.

    Args:
        profile_name: AWS profile to use

    Returns:
        Tuple of (credentials, region). region is empty when the profile does
        not configure one.

    Raises:
        ConfigError: If the profile or its credentials cannot be resolved
    """
    try:
        session = boto3.Session(profile_name=profile_name or None)
        resolved = session.get_credentials()
        if resolved is None:
            raise ConfigError(
                f"no credentials found for profile "
                f"'{profile_name or session.profile_name}'"
            )
        frozen = resolved.get_frozen_credentials()
    except (BotoCoreError, ClientError) as e:
        raise ConfigError(str(e)) from e

    if not frozen.access_key or not frozen.secret_key:
        raise ConfigError(
            f"incomplete credentials for profile '{profile_name or session.profile_name}'"
        )

    logger.debug(
        f"Loaded credentials from profile '{session.profile_name}' "
        f"(method: {resolved.method})"
    )
    creds = Credentials(
        access_key_id=frozen.access_key,
        secret_access_key=frozen.secret_key,
        session_token=frozen.token or "",
    )
    return creds, session.region_name or ""


def from_stream(data: Union[bytes, str]) -> Credentials:
    """
    Parse credentials from a JSON document.

    The nested STS shape is tried first, then the flat credential_process
    shape. A shape is accepted only when both the access key and the secret
    key are non-empty.

    Raises:
        ParseError: If neither shape yields complete credentials
    """
    try:
        nested = STSCredentialsResponse.model_validate_json(data)
    except ValidationError:
        nested = None

    if nested is not None and nested.credentials.is_complete():
        logger.debug("Parsed credentials from nested 'Credentials' object")
        return nested.credentials.to_credentials()

    try:
        flat = CredentialProcessResponse.model_validate_json(data)
    except ValidationError:
        flat = None

    if flat is not None and flat.is_complete():
        logger.debug("Parsed credentials from flat credential document")
        return flat.to_credentials()

    raise ParseError("failed to parse credentials")


def from_reader(reader: IO) -> Credentials:
    """Read a stream, typically stdin, in full and parse it with from_stream."""
    # Buffered once since the same bytes may be parsed twice.
    data = reader.read()
    return from_stream(data)
