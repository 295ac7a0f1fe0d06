#!/usr/bin/env python3
"""
CDK entry point for the Events API.

Deploy a second copy next to the first by overriding the stack id:

    cdk deploy -c stack_id=EventsApiStaging

The table and function names come from PREFIX in .env (see the stack).
"""
import aws_cdk as cdk
from stacks.events_api_stack import EventsApiStack

app = cdk.App()

EventsApiStack(
    app,
    app.node.try_get_context("stack_id") or "EventsApiStack",
    description="Events CRUD API: DynamoDB table, Lambda and API Gateway",
    env=cdk.Environment(
        account=app.node.try_get_context("account"),
        region=app.node.try_get_context("region") or "us-east-1",
    ),
)

app.synth()
