from functools import lru_cache

import boto3
from loguru import logger

from vpc_management_api.config import load_settings
from vpc_management_api.errors import (
    MetadataStoreError,
    RecordDecodeError,
    VpcNotFoundError,
)
from vpc_management_api.log import setup_logging
from vpc_management_api.models import ListVpcResponse
from vpc_management_api.responses import error_response, success_response
from vpc_management_api.store import VpcMetadataStore


class GetVpcsHandler:
    """GET /vpcs/{vpc_id} returns one record, GET /vpcs lists them all."""

    def __init__(self, store: VpcMetadataStore):
        self.store = store

    def __call__(self, event, context=None):
        vpc_id = (event.get("pathParameters") or {}).get("vpc_id")
        if vpc_id:
            return self.get_vpc(vpc_id)
        return self.list_vpcs(event.get("queryStringParameters") or {})

    def get_vpc(self, vpc_id: str):
        try:
            record = self.store.get_latest(vpc_id)
        except VpcNotFoundError as e:
            return error_response(e.status_code, "VPC not found", str(e))
        except RecordDecodeError as e:
            logger.error("Stored record for {} is malformed: {}", vpc_id, e)
            return error_response(e.status_code, "Failed to parse VPC data", str(e))
        except MetadataStoreError as e:
            logger.error("Query for {} failed: {}", vpc_id, e)
            return error_response(e.status_code, "Failed to query DynamoDB", str(e))
        return success_response(200, record)

    def list_vpcs(self, query_params: dict):
        # Query parameters are accepted but do not filter anything yet.
        if query_params:
            logger.debug("Ignoring query parameters {}", query_params)
        try:
            records = self.store.scan_all()
        except MetadataStoreError as e:
            logger.error("Scan failed: {}", e)
            return error_response(e.status_code, "Failed to scan DynamoDB", str(e))
        return success_response(200, ListVpcResponse(vpcs=records, count=len(records)))


@lru_cache(maxsize=None)
def build_handler() -> GetVpcsHandler:
    settings = load_settings()
    setup_logging(settings.log_level)
    table = boto3.resource("dynamodb").Table(settings.table_name)
    return GetVpcsHandler(VpcMetadataStore(table))


def handler(event, context):
    return build_handler()(event, context)
