from unittest.mock import MagicMock

import boto3
import pytest

from tests.unit.events import CREATED_AT, ZONES
from vpc_management_api.lambda_src.create_vpc import CreateVpcHandler
from vpc_management_api.lambda_src.get_vpcs import GetVpcsHandler
from vpc_management_api.network import NetworkProvisioner
from vpc_management_api.store import VpcMetadataStore


@pytest.fixture
def ec2_client():
    return boto3.client(
        "ec2",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def fake_ec2():
    """EC2 double that hands out sequential subnet ids."""
    ec2 = MagicMock()
    ec2.create_vpc.return_value = {"Vpc": {"VpcId": "vpc-0abc"}}
    ec2.describe_availability_zones.return_value = {
        "AvailabilityZones": [{"ZoneName": z, "State": "available"} for z in ZONES]
    }
    counter = iter(range(1, 100))
    ec2.create_subnet.side_effect = lambda **kw: {
        "Subnet": {"SubnetId": f"subnet-{next(counter)}"}
    }
    return ec2


@pytest.fixture
def fake_table():
    table = MagicMock()
    table.put_item.return_value = {}
    table.query.return_value = {"Items": []}
    table.scan.return_value = {"Items": []}
    return table


@pytest.fixture
def create_handler(fake_ec2, fake_table):
    return CreateVpcHandler(
        NetworkProvisioner(fake_ec2),
        VpcMetadataStore(fake_table),
        clock=lambda: CREATED_AT,
    )


@pytest.fixture
def get_handler(fake_table):
    return GetVpcsHandler(VpcMetadataStore(fake_table))
