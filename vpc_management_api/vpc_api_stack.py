from aws_cdk import (
    BundlingOptions,
    Stack,
    Duration,
    RemovalPolicy,
    aws_dynamodb as ddb,
    aws_lambda as _lambda,
    aws_iam as iam,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as apigw_int,
)
from constructs import Construct
import pathlib

from vpc_management_api.config import TABLE_NAME_VAR

class VpcApiStack(Stack):
    """HTTP API that creates VPCs + subnets and stores metadata in DynamoDB."""

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # 1. DynamoDB table: one item per created VPC, newest first by created_at
        table = ddb.Table(
            self, "VpcMetadata",
            partition_key=ddb.Attribute(name="vpc_id", type=ddb.AttributeType.STRING),
            sort_key=ddb.Attribute(name="created_at", type=ddb.AttributeType.STRING),
            billing_mode=ddb.BillingMode.PAY_PER_REQUEST,
            removal_policy=RemovalPolicy.DESTROY    # easy cleanup for the lab
        )

        # 2. IAM role for both Lambdas
        lambda_role = iam.Role(
            self, "LambdaExecRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            inline_policies={
                "VpcAndDdb": iam.PolicyDocument(statements=[
                    iam.PolicyStatement(
                        actions=[
                            "ec2:CreateVpc", "ec2:CreateSubnet",
                            "ec2:CreateTags", "ec2:DescribeAvailabilityZones"
                        ],
                        resources=["*"]
                    ),
                    iam.PolicyStatement(
                        actions=["dynamodb:PutItem", "dynamodb:Query", "dynamodb:Scan"],
                        resources=[table.table_arn]
                    )
                ])
            },
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "service-role/AWSLambdaBasicExecutionRole")
            ]
        )

        # 3. Lambda functions, packaged with their dependencies by pip
        project_dir = str(pathlib.Path(__file__).parent.parent)
        runtime = _lambda.Runtime.PYTHON_3_12
        common_args = dict(
            runtime=runtime,
            timeout=Duration.seconds(30),
            memory_size=256,
            role=lambda_role,
            environment={TABLE_NAME_VAR: table.table_name},
            code=_lambda.Code.from_asset(
                project_dir,
                exclude=["cdk.out", "tests", ".git", "*.pyc"],
                bundling=BundlingOptions(
                    image=runtime.bundling_image,
                    command=["bash", "-c", "pip install . -t /asset-output"],
                ),
            ),
        )

        create_fn = _lambda.Function(self, "CreateVpcFn",
                                     handler="vpc_management_api.lambda_src.create_vpc.handler",
                                     **common_args)
        get_fn = _lambda.Function(self, "GetVpcsFn",
                                  handler="vpc_management_api.lambda_src.get_vpcs.handler",
                                  **common_args)

        # 4. HTTP API; callers identify themselves with x-api-key
        http_api = apigw.HttpApi(self, "VpcApi",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_methods=[apigw.CorsHttpMethod.ANY],
                allow_origins=["*"],
                allow_headers=["Content-Type", "x-api-key"]
            )
        )

        http_api.add_routes(
            path="/vpcs",
            methods=[apigw.HttpMethod.POST],
            integration=apigw_int.HttpLambdaIntegration("CreateIntegration", create_fn)
        )
        get_integration = apigw_int.HttpLambdaIntegration("GetIntegration", get_fn)
        http_api.add_routes(
            path="/vpcs",
            methods=[apigw.HttpMethod.GET],
            integration=get_integration
        )
        http_api.add_routes(
            path="/vpcs/{vpc_id}",
            methods=[apigw.HttpMethod.GET],
            integration=get_integration
        )

        # 5. Outputs
        self.http_api_url = http_api.url
        self.table_name = table.table_name
