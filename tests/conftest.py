import copy
import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from events_api.dynamo import EventStore
from events_api.main import create_app


class FakeTable:
    """
    In-memory stand-in for the boto3 Table resource.

    Implements only the calls EventStore makes, with DynamoDB's return
    shapes. Items keep insertion order, which plays the role of scan order.
    """

    name = "test-events-table"

    def __init__(self):
        self.items = {}
        self.meta = MagicMock()

    def load(self):
        return None

    def put_item(self, Item, **kwargs):
        self.items[Item["_id"]] = copy.deepcopy(Item)
        return {}

    def scan(self, **kwargs):
        items = list(self.items.values())
        if "FilterExpression" in kwargs:
            wanted = kwargs["ExpressionAttributeValues"][":id"]
            items = [item for item in items if item.get("ID") == wanted]
        return {"Items": copy.deepcopy(items)}

    def update_item(self, Key, ExpressionAttributeValues, **kwargs):
        item = self.items.setdefault(Key["_id"], dict(Key))
        item["Title"] = ExpressionAttributeValues[":title"]
        item["Description"] = ExpressionAttributeValues[":description"]
        return {"Attributes": copy.deepcopy(item)}

    def delete_item(self, Key, **kwargs):
        old = self.items.pop(Key["_id"], None)
        return {"Attributes": old} if old else {}


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def store(table):
    return EventStore(table)


@pytest.fixture
def client(store):
    """FastAPI test client over an in-memory table (lifespan not run)"""
    return TestClient(create_app(store=store))
