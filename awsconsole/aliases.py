"""Location and policy alias tables."""

from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from awsconsole.errors import ConfigError
from awsconsole.utils import logger, resolve_env_variable

URL_PREFIX = "https://"

# Console pages to redirect to after logging in. {console} is the partition's
# console domain and {region} the preferred console region.
DEFAULT_LOCATIONS: Dict[str, str] = {
    "billing": "https://{console}/billing/home?region={region}",
    "cloudformation": "https://{region}.{console}/cloudformation/home?region={region}",
    "cloudshell": "https://{region}.{console}/cloudshell/home?region={region}",
    "cloudwatch": "https://{region}.{console}/cloudwatch/home?region={region}",
    "console": "https://{region}.{console}/console/home?region={region}",
    "ec2": "https://{region}.{console}/ec2/home?region={region}",
    "ecr": "https://{region}.{console}/ecr/home?region={region}",
    "ecs": "https://{region}.{console}/ecs/v2/home?region={region}",
    "eks": "https://{region}.{console}/eks/home?region={region}",
    "home": "https://{region}.{console}/console/home?region={region}",
    "iam": "https://{console}/iam/home?region={region}",
    "lambda": "https://{region}.{console}/lambda/home?region={region}",
    "rds": "https://{region}.{console}/rds/home?region={region}",
    "route53": "https://{console}/route53/v2/home?region={region}",
    "s3": "https://s3.{console}/s3/home?region={region}",
    "secretsmanager": "https://{region}.{console}/secretsmanager/home?region={region}",
    "ssm": "https://{region}.{console}/systems-manager/home?region={region}",
    "vpc": "https://{region}.{console}/vpcconsole/home?region={region}",
}

# Managed policies attached to a federated user session.
DEFAULT_POLICIES: Dict[str, str] = {
    "admin": "arn:{partition}:iam::aws:policy/AdministratorAccess",
    "all": "arn:{partition}:iam::aws:policy/AdministratorAccess",
    "billing": "arn:{partition}:iam::aws:policy/job-function/Billing",
    "poweruser": "arn:{partition}:iam::aws:policy/PowerUserAccess",
    "readonly": "arn:{partition}:iam::aws:policy/ReadOnlyAccess",
    "ro": "arn:{partition}:iam::aws:policy/ReadOnlyAccess",
    "viewonly": "arn:{partition}:iam::aws:policy/job-function/ViewOnlyAccess",
}


class AliasConfig(BaseModel):
    """User supplied alias tables, merged over the defaults."""

    locations: Dict[str, str] = Field(default_factory=dict)
    policies: Dict[str, str] = Field(default_factory=dict)

    @field_validator("locations", "policies", mode="before")
    @classmethod
    def resolve_values(cls, v, info):
        """Resolve values from environment variables if specified as ${VAR_NAME}"""
        if not isinstance(v, dict):
            return v
        return {
            key: resolve_env_variable(value, f"{info.field_name}.{key}")
            for key, value in v.items()
        }


class AliasResolver:
    """Resolves location and policy aliases against its own tables."""

    def __init__(
        self,
        locations: Optional[Mapping[str, str]] = None,
        policies: Optional[Mapping[str, str]] = None,
    ):
        self.locations = dict(locations or {})
        self.policies = dict(policies or {})

    @classmethod
    def default(cls) -> "AliasResolver":
        return cls(DEFAULT_LOCATIONS, DEFAULT_POLICIES)

    @classmethod
    def from_config(cls, config: AliasConfig) -> "AliasResolver":
        """Build a resolver with the config's entries layered over the defaults."""
        return cls(
            {**DEFAULT_LOCATIONS, **config.locations},
            {**DEFAULT_POLICIES, **config.policies},
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "AliasResolver":
        """Build from YAML file"""
        path = Path(yaml_path)

        if not path.exists():
            raise ConfigError(f"Alias config file not found: {yaml_path}")

        try:
            with open(path, "r") as f:
                config_dict = yaml.safe_load(f) or {}
            config = AliasConfig(**config_dict)
        except (OSError, yaml.YAMLError, ValidationError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid alias config file {yaml_path}: {e}") from e

        logger.debug(
            f"Loaded {len(config.locations)} location and "
            f"{len(config.policies)} policy aliases from {path}"
        )
        return cls.from_config(config)

    def resolve_location(
        self, alias: str, console_domain: str, region: str
    ) -> Tuple[str, bool]:
        """
        Resolve a location alias into a console url.

        Values that are already https urls are returned verbatim. Known
        aliases have their {region} and {console} placeholders filled in.

        Returns:
            Tuple of (url, found). url is empty when found is False.
        """
        if alias.startswith(URL_PREFIX):
            return alias, True

        template = self.locations.get(alias)
        if template is None:
            return "", False

        url = template.replace("{region}", region).replace("{console}", console_domain)
        return url, True

    def resolve_policy(self, alias: str, partition: str) -> str:
        """Resolve a policy alias, or a literal ARN, for the given partition."""
        template = self.policies.get(alias, alias)
        return template.replace("{partition}", partition)
