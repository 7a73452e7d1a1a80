#!/usr/bin/env python3
"""Synthesize the VPC management API stack (``cdk synth`` / ``cdk deploy``)."""

import os

import aws_cdk as cdk

from vpc_management_api.network import MANAGED_BY
from vpc_management_api.vpc_api_stack import VpcApiStack

app = cdk.App()

stack = VpcApiStack(
    app,
    app.node.try_get_context("stack_name") or "VpcManagementApiStack",
    description="HTTP API that provisions VPCs and subnets and records them in DynamoDB",
    env=cdk.Environment(
        account=os.getenv("CDK_DEFAULT_ACCOUNT"),
        region=os.getenv("CDK_DEFAULT_REGION", "us-east-1"),
    ),
)
# same marker the API puts on the VPCs and subnets it creates
cdk.Tags.of(stack).add("ManagedBy", MANAGED_BY)

cdk.CfnOutput(stack, "ApiUrl", value=stack.http_api_url)
cdk.CfnOutput(stack, "TableName", value=stack.table_name)

app.synth()
