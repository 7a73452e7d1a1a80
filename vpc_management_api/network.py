"""EC2 calls used to provision a VPC and its subnets."""

from typing import List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from .errors import ProvisioningError
from .models import SubnetRequest, SubnetResult

MANAGED_BY = "VPC-Management-API"


def _tag_specifications(resource_type: str, name: str) -> list:
    return [{
        "ResourceType": resource_type,
        "Tags": [
            {"Key": "Name", "Value": name},
            {"Key": "ManagedBy", "Value": MANAGED_BY},
        ],
    }]


def _response_field(resp, resource: str, field: str, context: str) -> str:
    try:
        return resp[resource][field]
    except (KeyError, TypeError) as e:
        raise ProvisioningError(f"{context}: malformed response, missing {resource}.{field}") from e


def assign_availability_zone(index: int, requested: Optional[str],
                             available: Sequence[str]) -> str:
    """Zone for the subnet at ``index``.

    An explicit zone always wins. Otherwise subnets are spread over the
    available zones by position, and any subnet past the end of the list
    falls back to the first zone.
    """
    if requested:
        return requested
    if not available:
        raise ProvisioningError("no availability zones are available in this region")
    if index < len(available):
        return available[index]
    return available[0]


class NetworkProvisioner:
    """Thin wrapper over a boto3 EC2 client."""

    def __init__(self, ec2_client):
        self._ec2 = ec2_client

    def create_vpc(self, cidr_block: str, vpc_name: str) -> str:
        try:
            resp = self._ec2.create_vpc(
                CidrBlock=cidr_block,
                TagSpecifications=_tag_specifications("vpc", vpc_name),
            )
        except (ClientError, BotoCoreError) as e:
            raise ProvisioningError(f"failed to create VPC: {e}") from e
        vpc_id = _response_field(resp, "Vpc", "VpcId", "failed to create VPC")
        logger.info("Created VPC {} ({}) named {}", vpc_id, cidr_block, vpc_name)
        return vpc_id

    def list_available_zones(self) -> List[str]:
        try:
            resp = self._ec2.describe_availability_zones(
                Filters=[{"Name": "state", "Values": ["available"]}],
            )
        except (ClientError, BotoCoreError) as e:
            raise ProvisioningError(f"failed to describe availability zones: {e}") from e
        try:
            return [zone["ZoneName"] for zone in resp["AvailabilityZones"]]
        except (KeyError, TypeError) as e:
            raise ProvisioningError(
                f"failed to describe availability zones: malformed response ({e!r})") from e

    def create_subnet(self, vpc_id: str, cidr_block: str,
                      availability_zone: str, name: str) -> str:
        try:
            resp = self._ec2.create_subnet(
                VpcId=vpc_id,
                CidrBlock=cidr_block,
                AvailabilityZone=availability_zone,
                TagSpecifications=_tag_specifications("subnet", name),
            )
        except (ClientError, BotoCoreError) as e:
            raise ProvisioningError(f"failed to create subnet {name}: {e}") from e
        return _response_field(resp, "Subnet", "SubnetId", f"failed to create subnet {name}")

    def provision_subnets(self, vpc_id: str,
                          subnets: Sequence[SubnetRequest]) -> List[SubnetResult]:
        """Create ``subnets`` in order; the first failure aborts the rest."""
        zones = self.list_available_zones()

        results = []
        for i, subnet in enumerate(subnets):
            az = assign_availability_zone(i, subnet.availability_zone, zones)
            subnet_id = self.create_subnet(vpc_id, subnet.cidr_block, az, subnet.name)
            logger.info("Created subnet {} ({}) in {}", subnet_id, subnet.cidr_block, az)
            results.append(SubnetResult(
                subnet_id=subnet_id,
                cidr_block=subnet.cidr_block,
                availability_zone=az,
                name=subnet.name,
            ))
        return results
