import logging
import os
import re

from rich.console import Console
from rich.logging import RichHandler


def _logger(flag: str = "", name: str = "awsconsole"):
    logger = logging.getLogger(name)

    if os.environ.get(flag) is not None:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    # stdout is reserved for the login url
    handler = RichHandler(console=Console(stderr=True), log_time_format="")
    logger.addHandler(handler)
    return logger


# export AWS_CONSOLE_DEBUG=true
logger = _logger("AWS_CONSOLE_DEBUG")


def resolve_env_variable(value: str, field_name: str = "field") -> str:
    """
    Resolve environment variable from a string value.

    If the value is in the format ${VAR_NAME}, it will be replaced with
    the value of the environment variable VAR_NAME.

    Args:
        value: The string value that may contain ${VAR_NAME}
        field_name: Name of the field (for error messages)

    Returns:
        The resolved value (either the env var value or original value)

    Raises:
        ValueError: If the environment variable is not set

    Example:
        >>> os.environ['ACCOUNT_ID'] = '123456789012'
        >>> resolve_env_variable('${ACCOUNT_ID}')
        '123456789012'
        >>> resolve_env_variable('plaintext')
        'plaintext'
    """
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        env_var = value[2:-1]
        env_value = os.getenv(env_var)
        if env_value is None:
            raise ValueError(
                f"Environment variable '{env_var}' for {field_name} is not set"
            )
        return env_value
    return value


_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(h|ms|m|s)")

_DURATION_UNITS = {"h": 3600, "m": 60, "s": 1, "ms": 0.001}


def parse_duration(value: str) -> int:
    """
    Parse a duration string into whole seconds.

    Accepts a bare number of seconds ("3600") or a sequence of unit
    suffixed parts ("15m", "1h30m", "90s").

    Raises:
        ValueError: If the value is not a valid duration
    """
    value = value.strip()
    if value.isdigit():
        return int(value)

    if not value or _DURATION_PART.sub("", value) != "":
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    for amount, unit in _DURATION_PART.findall(value):
        total += float(amount) * _DURATION_UNITS[unit]
    # a non-zero request must not collapse to "no duration"
    if total > 0:
        return max(1, int(total))
    return 0
