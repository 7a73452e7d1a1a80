"""Serverless API that creates VPCs + subnets and stores metadata in DynamoDB."""

__version__ = "0.1.0"
