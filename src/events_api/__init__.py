"""Events API: CRUD over a single event collection stored in DynamoDB."""

__version__ = "1.0.0"
