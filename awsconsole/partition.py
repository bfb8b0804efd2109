"""AWS partition lookup for console and federation endpoints."""

from typing import Dict, Tuple

import botocore.session
from botocore.exceptions import BotoCoreError
from pydantic import BaseModel, ConfigDict

from awsconsole.errors import PartitionUnresolvedError
from awsconsole.utils import logger

DEFAULT_PARTITION = "aws"


class PartitionInfo(BaseModel):
    """Console domain and federation endpoint of a partition."""

    model_config = ConfigDict(frozen=True)

    partition_id: str
    console_domain: str
    federation_endpoint: str


PARTITIONS: Dict[str, PartitionInfo] = {
    "aws": PartitionInfo(
        partition_id="aws",
        console_domain="console.aws.amazon.com",
        federation_endpoint="https://signin.aws.amazon.com/federation",
    ),
    # Not verified against a live China account.
    "aws-cn": PartitionInfo(
        partition_id="aws-cn",
        console_domain="console.amazonaws.cn",
        federation_endpoint="https://signin.amazonaws.cn/federation",
    ),
    "aws-us-gov": PartitionInfo(
        partition_id="aws-us-gov",
        console_domain="console.amazonaws-us-gov.com",
        federation_endpoint="https://signin.amazonaws-us-gov.com/federation",
    ),
}


def get_partition_id(region: str) -> str:
    """
    Classify a region using botocore's bundled endpoint data.

    Falls back to the commercial partition when the region is empty or does
    not match any partition's region pattern.
    """
    if not region:
        return DEFAULT_PARTITION

    try:
        return botocore.session.get_session().get_partition_for_region(region)
    except BotoCoreError as e:
        logger.debug(f"Could not classify region '{region}' ({e}), assuming aws")
        return DEFAULT_PARTITION


def resolve_region_partition(region: str) -> Tuple[str, str, str, bool]:
    """
    Resolve a region to its partition, console domain and federation url.

    Returns:
        Tuple of (partition_id, console_domain, federation_endpoint, found).
        All strings are empty when found is False.
    """
    partition = get_partition_id(region)
    info = PARTITIONS.get(partition)
    if info is None:
        return "", "", "", False

    return info.partition_id, info.console_domain, info.federation_endpoint, True


def get_partition_info(region: str) -> PartitionInfo:
    """Like resolve_region_partition, but raises when nothing is known."""
    partition = get_partition_id(region)
    info = PARTITIONS.get(partition)
    if info is None:
        raise PartitionUnresolvedError(region, partition)

    logger.debug(f"Region '{region}' is in partition '{info.partition_id}'")
    return info
