import json

CREATED_AT = "2024-05-01T12:00:00.000000Z"
ZONES = ["us-east-1a", "us-east-1b", "us-east-1c"]


def api_event(body=None, headers=None, path_parameters=None, query=None):
    return {
        "body": body if body is None or isinstance(body, str) else json.dumps(body),
        "headers": headers or {},
        "pathParameters": path_parameters,
        "queryStringParameters": query,
        "isBase64Encoded": False,
    }


def stored_item(vpc_id="vpc-0abc", created_at=CREATED_AT, **overrides):
    item = {
        "vpc_id": vpc_id,
        "created_at": created_at,
        "created_by": "api-user",
        "vpc_cidr": "10.0.0.0/16",
        "vpc_name": "demo",
        "status": "created",
        "subnets": [{
            "subnet_id": "subnet-1",
            "cidr_block": "10.0.1.0/24",
            "availability_zone": "us-east-1a",
            "name": "a",
        }],
    }
    item.update(overrides)
    return item
