"""API Gateway proxy responses."""

import json

from pydantic import BaseModel

from .models import ErrorResponse

HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def _resp(code: int, body: dict) -> dict:
    return {"statusCode": code, "headers": dict(HEADERS), "body": json.dumps(body)}


def success_response(code: int, model: BaseModel) -> dict:
    return _resp(code, model.model_dump())


def error_response(code: int, error: str, message: str = "") -> dict:
    body = ErrorResponse(error=error, message=message or None)
    return _resp(code, body.model_dump(exclude_none=True))
