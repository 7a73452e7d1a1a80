import base64
import json
from datetime import datetime, timezone
from functools import lru_cache

import boto3
from loguru import logger
from pydantic import ValidationError

from vpc_management_api.config import load_settings
from vpc_management_api.errors import (
    MetadataStoreError,
    ProvisioningError,
    RequestValidationError,
)
from vpc_management_api.log import setup_logging
from vpc_management_api.models import (
    STATUS_CREATED,
    CreateVpcRequest,
    CreateVpcResponse,
    VpcRecord,
    resolve_created_by,
)
from vpc_management_api.network import NetworkProvisioner
from vpc_management_api.responses import error_response, success_response
from vpc_management_api.store import VpcMetadataStore


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _read_body(event) -> str:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return body


class CreateVpcHandler:
    """POST /vpcs: create the VPC, its subnets, then record the metadata.

    Nothing is rolled back; if a subnet or the metadata write fails the VPC
    stays allocated in EC2 without a record.
    """

    def __init__(self, network: NetworkProvisioner, store: VpcMetadataStore,
                 clock=_utc_now):
        self.network = network
        self.store = store
        self.clock = clock

    def __call__(self, event, context=None):
        try:
            payload = json.loads(_read_body(event))
            request = CreateVpcRequest.model_validate({} if payload is None else payload)
        except (ValueError, ValidationError) as e:
            return error_response(400, "Invalid JSON", str(e))

        try:
            request.validate_required()
        except RequestValidationError as e:
            logger.info("Rejected create request: {}", e)
            return error_response(e.status_code, "Validation failed", str(e))

        created_by = resolve_created_by(event.get("headers"))

        # 1 Create VPC
        try:
            vpc_id = self.network.create_vpc(request.cidr_block, request.vpc_name)
        except ProvisioningError as e:
            logger.error("VPC creation failed: {}", e)
            return error_response(e.status_code, "Failed to create VPC", str(e))

        # 2 Create subnets
        try:
            subnets = self.network.provision_subnets(vpc_id, request.subnets)
        except ProvisioningError as e:
            logger.error("Subnet creation failed for {}: {}", vpc_id, e)
            return error_response(e.status_code, "Failed to create subnets", str(e))

        # 3 Persist
        record = VpcRecord(
            vpc_id=vpc_id,
            created_at=self.clock(),
            created_by=created_by,
            vpc_cidr=request.cidr_block,
            vpc_name=request.vpc_name,
            status=STATUS_CREATED,
            subnets=subnets,
        )
        try:
            self.store.put(record)
        except MetadataStoreError as e:
            logger.error("Metadata write failed for {}: {}", vpc_id, e)
            return error_response(e.status_code, "Failed to store metadata", str(e))

        logger.info("VPC {} created by {} with {} subnet(s)",
                    vpc_id, created_by, len(subnets))
        return success_response(201, CreateVpcResponse(
            message="VPC created successfully",
            vpc_id=vpc_id,
            vpc_cidr=record.vpc_cidr,
            subnets=subnets,
            created_at=record.created_at,
            created_by=created_by,
        ))


@lru_cache(maxsize=None)
def build_handler() -> CreateVpcHandler:
    settings = load_settings()
    setup_logging(settings.log_level)
    table = boto3.resource("dynamodb").Table(settings.table_name)
    return CreateVpcHandler(NetworkProvisioner(boto3.client("ec2")),
                            VpcMetadataStore(table))


def handler(event, context):
    return build_handler()(event, context)
