"""DynamoDB access for VPC metadata records."""

from typing import List

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from pydantic import ValidationError

from .errors import MetadataStoreError, RecordDecodeError, VpcNotFoundError
from .models import VpcRecord


class VpcMetadataStore:
    """Reads and writes VpcRecord items in a table keyed by vpc_id + created_at."""

    def __init__(self, table):
        self._table = table
        # Items skipped by scan_all because they did not decode.
        self.decode_failures = 0

    def put(self, record: VpcRecord) -> None:
        try:
            self._table.put_item(Item=record.model_dump())
        except (ClientError, BotoCoreError) as e:
            raise MetadataStoreError(f"failed to store VPC metadata: {e}") from e

    def get_latest(self, vpc_id: str) -> VpcRecord:
        """Most recent record for ``vpc_id`` (descending created_at, limit 1)."""
        try:
            items = self._table.query(
                KeyConditionExpression=Key("vpc_id").eq(vpc_id),
                ScanIndexForward=False,
                Limit=1,
            )["Items"]
        except (ClientError, BotoCoreError) as e:
            raise MetadataStoreError(str(e)) from e

        if not items:
            raise VpcNotFoundError(f"VPC with ID {vpc_id} does not exist")
        try:
            return VpcRecord.model_validate(items[0])
        except ValidationError as e:
            raise RecordDecodeError(str(e)) from e

    def scan_all(self) -> List[VpcRecord]:
        records = []
        kwargs = {}
        while True:
            try:
                page = self._table.scan(**kwargs)
            except (ClientError, BotoCoreError) as e:
                raise MetadataStoreError(str(e)) from e

            for item in page.get("Items", []):
                try:
                    records.append(VpcRecord.model_validate(item))
                except ValidationError as e:
                    self.decode_failures += 1
                    logger.warning("Skipping undecodable item {}: {}",
                                   item.get("vpc_id"), e)

            if "LastEvaluatedKey" not in page:
                return records
            kwargs["ExclusiveStartKey"] = page["LastEvaluatedKey"]
