#!/usr/bin/env python3
"""
Create the single DynamoDB table used by the Kefir Tracker API.

Creates the table keyed on PK/SK with the GSI1 index (GSI1PK/GSI1SK)
used for batch-by-id lookups. Works against AWS or DynamoDB Local.

Usage:
    python scripts/create_table.py --table kefir-local
    python scripts/create_table.py --table kefir-local --endpoint http://localhost:8000
    python scripts/create_table.py --table kefir-local --endpoint http://localhost:8000 --reset
"""

import argparse
import sys

import boto3
from botocore.exceptions import ClientError


def table_definition(table_name: str, gsi1_index_name: str = "GSI1") -> dict:
    """Keyword arguments for ``create_table``."""
    return {
        "TableName": table_name,
        "KeySchema": [
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        "AttributeDefinitions": [
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
            {"AttributeName": "GSI1PK", "AttributeType": "S"},
            {"AttributeName": "GSI1SK", "AttributeType": "S"},
        ],
        "GlobalSecondaryIndexes": [
            {
                "IndexName": gsi1_index_name,
                "KeySchema": [
                    {"AttributeName": "GSI1PK", "KeyType": "HASH"},
                    {"AttributeName": "GSI1SK", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        "BillingMode": "PAY_PER_REQUEST",
    }


def main():
    parser = argparse.ArgumentParser(description="Create the Kefir Tracker DynamoDB table")
    parser.add_argument("--table", required=True, help="Table name")
    parser.add_argument("--region", default="us-east-1", help="AWS region (default: us-east-1)")
    parser.add_argument("--endpoint", default=None, help="Endpoint URL, e.g. DynamoDB Local")
    parser.add_argument("--reset", action="store_true", help="Delete the table first if it exists")
    args = parser.parse_args()

    client = boto3.client("dynamodb", region_name=args.region, endpoint_url=args.endpoint)

    if args.reset:
        try:
            client.delete_table(TableName=args.table)
            client.get_waiter("table_not_exists").wait(TableName=args.table)
            print(f"Deleted table {args.table}")
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceNotFoundException":
                raise

    try:
        client.create_table(**table_definition(args.table))
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"Table {args.table} already exists (use --reset to recreate)")
            sys.exit(0)
        raise

    client.get_waiter("table_exists").wait(TableName=args.table)
    print(f"Created table {args.table}")


if __name__ == "__main__":
    main()
