#!/usr/bin/env python3
"""
Create the events table on a DynamoDB endpoint.

Meant for DynamoDB Local during development; deployed stacks get the table
from the CDK app. Uses the same EVENTS_TABLE, AWS_REGION and
DYNAMODB_ENDPOINT_URL variables as the API.

    DYNAMODB_ENDPOINT_URL=http://localhost:8000 python scripts/create_events_table.py
"""
import sys
import boto3
from botocore.exceptions import ClientError

from events_api import config


def create_events_table():
    dynamodb = boto3.resource(
        "dynamodb",
        region_name=config.AWS_REGION,
        endpoint_url=config.DYNAMODB_ENDPOINT_URL,
    )

    print(f"Creating table {config.EVENTS_TABLE}...")

    try:
        table = dynamodb.create_table(
            TableName=config.EVENTS_TABLE,
            KeySchema=[{"AttributeName": "_id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "_id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        table.wait_until_exists()
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ Table {config.EVENTS_TABLE} already exists")
            return
        print(f"✗ Error creating table {config.EVENTS_TABLE}: {e}")
        sys.exit(1)

    print(f"✓ Created table {config.EVENTS_TABLE}")


if __name__ == "__main__":
    create_events_table()
