import os
from dotenv import load_dotenv
from aws_cdk import (
    Stack,
    Duration,
    RemovalPolicy,
    CfnOutput,
    BundlingOptions,
    aws_dynamodb as dynamodb,
    aws_lambda as lambda_,
    aws_apigateway as apigateway,
)
from constructs import Construct

# Load environment variables from .env file
load_dotenv()

prefix = os.getenv("PREFIX", "EventsApi")


class EventsApiStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # ============================================================
        # DynamoDB Table: Events
        # _id is generated by the API. The client-facing ID attribute has
        # no index and no uniqueness constraint.
        # ============================================================
        self.events_table = dynamodb.Table(
            self,
            "Events",
            table_name=f"{prefix}-Events",
            partition_key=dynamodb.Attribute(
                name="_id", type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=RemovalPolicy.DESTROY,  # For dev/demo only
            point_in_time_recovery=False,
        )

        # ============================================================
        # API Lambda (FastAPI behind Mangum)
        # Bundled dependencies, no layer
        # ============================================================
        self.api_lambda = lambda_.Function(
            self,
            "ApiLambda",
            function_name=f"{prefix}-ApiHandler",
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler="events_api.main.handler",
            code=lambda_.Code.from_asset(
                "../",
                exclude=["cdk", "cdk.out", "tests", ".venv"],
                bundling=BundlingOptions(
                    image=lambda_.Runtime.PYTHON_3_12.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install . -t /asset-output",
                    ],
                ),
            ),
            # Matches the per-operation bound in events_api.config
            timeout=Duration.seconds(30),
            memory_size=512,
            environment={
                "EVENTS_TABLE": self.events_table.table_name,
            },
        )

        self.events_table.grant_read_write_data(self.api_lambda)

        # ============================================================
        # API Gateway REST API
        # ============================================================
        self.api = apigateway.LambdaRestApi(
            self,
            "EventsApi",
            handler=self.api_lambda,
            proxy=True,  # Forward all requests to Lambda
            rest_api_name=f"{prefix} Events API",
            description="CRUD over events stored in DynamoDB",
            deploy_options=apigateway.StageOptions(stage_name="prod"),
        )

        # Outputs
        CfnOutput(
            self,
            "EventsTableName",
            value=self.events_table.table_name,
            description="Events table name",
        )

        CfnOutput(
            self,
            "ApiUrl",
            value=self.api.url,
            description="API Gateway endpoint URL",
        )
