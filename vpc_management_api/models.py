"""
Request, record and response models for the VPC API.

The same shapes are used for the JSON bodies exchanged with API Gateway and
for the items stored in DynamoDB.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .errors import RequestValidationError

STATUS_CREATED = "created"
DEFAULT_CREATED_BY = "api-user"
MAX_CREATED_BY_LENGTH = 20


# ── Request models ────────────────────────────────────────────────────────────

class SubnetRequest(BaseModel):
    """A single subnet to be created inside the VPC."""

    cidr_block: str = Field("", examples=["10.0.1.0/24"])
    name: str = Field("", examples=["public-a"])
    availability_zone: Optional[str] = Field(
        None,
        examples=["us-east-1a"],
        description="Picked from the available zones by position if omitted.",
    )

    @field_validator("cidr_block", "name", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class CreateVpcRequest(BaseModel):
    """Request body for POST /vpcs."""

    cidr_block: str = Field("", examples=["10.0.0.0/16"])
    vpc_name: str = Field("", examples=["demo"])
    subnets: List[SubnetRequest] = Field(default_factory=list)

    @field_validator("cidr_block", "vpc_name", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("subnets", mode="before")
    @classmethod
    def _null_subnets(cls, v):
        # null entries count as subnets with every field missing
        if v is None:
            return []
        if isinstance(v, list):
            return [{} if s is None else s for s in v]
        return v

    def validate_required(self) -> None:
        """Raise RequestValidationError on the first missing field."""
        if not self.cidr_block:
            raise RequestValidationError("cidr_block is required")
        if not self.vpc_name:
            raise RequestValidationError("vpc_name is required")
        if not self.subnets:
            raise RequestValidationError("at least one subnet is required")
        for i, subnet in enumerate(self.subnets):
            if not subnet.cidr_block:
                raise RequestValidationError(f"subnet[{i}]: cidr_block is required")
            if not subnet.name:
                raise RequestValidationError(f"subnet[{i}]: name is required")


# ── Stored records ────────────────────────────────────────────────────────────

class SubnetResult(BaseModel):
    subnet_id: str = ""
    cidr_block: str = ""
    availability_zone: str = ""
    name: str = ""


class VpcRecord(BaseModel):
    """One item of the metadata table, keyed by vpc_id and sorted by created_at."""

    vpc_id: str = ""
    created_at: str = ""
    created_by: str = ""
    vpc_cidr: str = ""
    vpc_name: str = ""
    status: str = ""
    subnets: List[SubnetResult] = Field(default_factory=list)


# ── Response models ───────────────────────────────────────────────────────────

class CreateVpcResponse(BaseModel):
    message: str
    vpc_id: str
    vpc_cidr: str
    subnets: List[SubnetResult]
    created_at: str
    created_by: str


class ListVpcResponse(BaseModel):
    """Returned by GET /vpcs (list all)."""

    vpcs: List[VpcRecord]
    count: int


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


def resolve_created_by(headers) -> str:
    """Caller identity from the x-api-key header, capped at 20 characters."""
    api_key = ""
    for key, value in (headers or {}).items():
        if key.lower() == "x-api-key":
            api_key = value or ""
            break
    if not api_key:
        api_key = DEFAULT_CREATED_BY
    return api_key[:MAX_CREATED_BY_LENGTH]
