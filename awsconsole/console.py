"""AWS console login url generation through the federation endpoint.

See https://docs.aws.amazon.com/IAM/latest/UserGuide/id_roles_providers_enable-console-custom-url.html
"""

import json

import requests

from awsconsole.credentials import Credentials
from awsconsole.errors import SigninTokenError
from awsconsole.utils import logger

# requests applies this to the connect and to each read of the
# getSigninToken request separately, not to the request as a whole.
TIMEOUT_SECONDS = 15


def session_json(creds: Credentials) -> str:
    """Encode credentials the way the getSigninToken action expects."""
    return json.dumps(
        {
            "sessionId": creds.access_key_id,
            "sessionKey": creds.secret_access_key,
            "sessionToken": creds.session_token,
        }
    )


def extract_token(response: requests.Response) -> str:
    """Return the SigninToken from a getSigninToken response."""
    try:
        body = response.json()
    except ValueError as e:
        raise SigninTokenError(
            f"could not parse signin token response: {e}",
            status=response.status_code,
            body=response.text,
        ) from e

    token = body.get("SigninToken") if isinstance(body, dict) else None
    if not token:
        raise SigninTokenError(
            "signin token response did not contain a SigninToken",
            status=response.status_code,
            body=response.text,
        )
    return token


def get_signin_token(
    creds: Credentials, duration: int, user_agent: str, federation_endpoint: str
) -> str:
    """
    Exchange temporary credentials for a signin token.

    SessionDuration is omitted when duration is 0, so the console session
    lasts as long as the backing credentials.
    """
    params = {
        "Action": "getSigninToken",
        "Session": session_json(creds),
    }
    if duration != 0:
        params["SessionDuration"] = str(int(duration))

    logger.debug(f"Requesting signin token from {federation_endpoint}")
    try:
        r = requests.get(
            federation_endpoint,
            params=params,
            headers={"User-Agent": user_agent},
            timeout=TIMEOUT_SECONDS,
        )
    except requests.exceptions.RequestException as e:
        raise SigninTokenError(f"signin token request failed: {e}") from e

    if r.status_code != requests.codes.ok:
        raise SigninTokenError(
            f"request failed: {r.status_code} {r.reason}",
            status=r.status_code,
            body=r.text,
        )

    return extract_token(r)


def login_url(federation_endpoint: str, destination: str, signin_token: str) -> str:
    """Build the login url from a signin token."""
    request = requests.Request(
        "GET",
        federation_endpoint,
        params={
            "Action": "login",
            "Destination": destination,
            "SigninToken": signin_token,
        },
    )
    return request.prepare().url


def generate_login_url(
    creds: Credentials,
    duration: int,
    destination: str,
    user_agent: str,
    federation_endpoint: str,
) -> str:
    """
    Generate a url that logs into the AWS console and redirects to destination.

    Args:
        creds: Temporary credentials (with a session token)
        duration: Console session duration in seconds, 0 for the credential lifetime
        destination: Console url to land on after logging in
        user_agent: User agent sent to the federation endpoint
        federation_endpoint: Partition specific federation url

    Returns:
        The login url

    Raises:
        SigninTokenError: If no signin token could be obtained
    """
    token = get_signin_token(creds, duration, user_agent, federation_endpoint)
    logger.debug("Signin token received")
    return login_url(federation_endpoint, destination, token)
