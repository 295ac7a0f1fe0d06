import os

# Read once at import, the same way the Lambda handlers pick up their tables.
EVENTS_TABLE = os.environ.get("EVENTS_TABLE", "events")
AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")

# Unset means the regional AWS endpoint; point at DynamoDB Local for development.
DYNAMODB_ENDPOINT_URL = os.environ.get("DYNAMODB_ENDPOINT_URL") or None

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "9090"))

CONNECT_TIMEOUT_SECONDS = 10
OPERATION_TIMEOUT_SECONDS = 30
