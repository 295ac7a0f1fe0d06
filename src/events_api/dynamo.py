import uuid
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from typing import Any, Dict, List, Optional

from . import config
from .errors import EventNotFoundError, EventStoreError
from .models import DeleteResult, Event, EventPatch, InsertResult, UpdatedEvent

# Partition key of the events table. Generated here, never taken from clients.
RECORD_ID = "_id"

# ID is a plain attribute (no index), so filtering on it is a scan.
ID_FILTER = {
    "FilterExpression": "#id = :id",
    "ExpressionAttributeNames": {"#id": "ID"},
}


def new_record_id() -> str:
    return uuid.uuid4().hex


def client_config() -> Config:
    """
    Bound every call: 10s to open a connection, 30s for the operation itself.
    Retries are disabled so a failure surfaces on the first attempt.
    """
    return Config(
        connect_timeout=config.CONNECT_TIMEOUT_SECONDS,
        read_timeout=config.OPERATION_TIMEOUT_SECONDS,
        retries={"max_attempts": 0},
    )


class EventStore:
    """
    The one handle onto the events table, shared by every request.

    Each public method performs a single logical operation and raises
    EventStoreError (or EventNotFoundError) on failure. boto3 resources are
    used from the FastAPI threadpool; botocore pools the connections.
    """

    def __init__(self, table):
        self.table = table

    @classmethod
    def from_config(cls) -> "EventStore":
        dynamodb = boto3.resource(
            "dynamodb",
            region_name=config.AWS_REGION,
            endpoint_url=config.DYNAMODB_ENDPOINT_URL,
            config=client_config(),
        )
        return cls(dynamodb.Table(config.EVENTS_TABLE))

    def connect(self) -> None:
        """Check the table is reachable (DescribeTable). Raises on error."""
        try:
            self.table.load()
        except (BotoCoreError, ClientError) as e:
            raise EventStoreError(f"Cannot reach table {self.table.name}: {e}") from e
        print(f"Connected to DynamoDB table {self.table.name}")

    def close(self) -> None:
        """Release the client's HTTP connections. Raises on error."""
        self.table.meta.client.close()
        print("Connection to DynamoDB closed.")

    def insert_event(self, event: Event) -> InsertResult:
        record_id = new_record_id()
        item = {RECORD_ID: record_id, **event.to_item()}

        try:
            self.table.put_item(
                Item=item,
                ConditionExpression="attribute_not_exists(#rid)",
                ExpressionAttributeNames={"#rid": RECORD_ID},
            )
        except (BotoCoreError, ClientError) as e:
            raise EventStoreError(str(e)) from e

        return InsertResult(inserted_id=record_id)

    def find_event(self, event_id: str) -> Event:
        item = self._first_item(event_id)
        if item is None:
            raise EventNotFoundError()
        return Event.model_validate(item)

    def list_events(self) -> List[Event]:
        """Every item in the table, in scan order. No paging is exposed."""
        return [Event.model_validate(item) for item in self._scan({})]

    def upsert_event(self, event_id: str, patch: EventPatch) -> UpdatedEvent:
        """
        Overwrite Title and Description on the first item whose ID matches,
        creating a new item when none does.

        A created item only gets Title and Description: the ID used to look
        it up is not copied onto it, so later lookups by that ID will not
        find it.
        """
        item = self._first_item(event_id)
        record_id = item[RECORD_ID] if item else new_record_id()

        try:
            response = self.table.update_item(
                Key={RECORD_ID: record_id},
                UpdateExpression="SET #title = :title, #description = :description",
                ExpressionAttributeNames={
                    "#title": "Title",
                    "#description": "Description",
                },
                ExpressionAttributeValues={
                    ":title": patch.title,
                    ":description": patch.description,
                },
                ReturnValues="ALL_NEW",
            )
        except (BotoCoreError, ClientError) as e:
            raise EventStoreError(str(e)) from e

        return UpdatedEvent.model_validate(response["Attributes"])

    def delete_event(self, event_id: str) -> DeleteResult:
        item = self._first_item(event_id)
        if item is None:
            return DeleteResult(deleted_count=0)

        try:
            response = self.table.delete_item(
                Key={RECORD_ID: item[RECORD_ID]},
                ReturnValues="ALL_OLD",
            )
        except (BotoCoreError, ClientError) as e:
            raise EventStoreError(str(e)) from e

        # A concurrent delete may have removed it between the scan and here.
        return DeleteResult(deleted_count=1 if response.get("Attributes") else 0)

    def _first_item(self, event_id: str) -> Optional[Dict[str, Any]]:
        scan_params = {**ID_FILTER, "ExpressionAttributeValues": {":id": event_id}}
        for item in self._scan(scan_params):
            return item
        return None

    def _scan(self, scan_params: Dict[str, Any]):
        """Yield items page by page until LastEvaluatedKey runs out."""
        scan_params = {**scan_params, "ConsistentRead": True}

        while True:
            try:
                response = self.table.scan(**scan_params)
            except (BotoCoreError, ClientError) as e:
                raise EventStoreError(str(e)) from e

            yield from response.get("Items", [])

            last_evaluated_key = response.get("LastEvaluatedKey")
            if not last_evaluated_key:
                return
            scan_params["ExclusiveStartKey"] = last_evaluated_key
