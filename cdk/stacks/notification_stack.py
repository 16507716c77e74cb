"""CDK stack for the Billing Notification Lambda and its daily schedule."""

from aws_cdk import (
    BundlingOptions,
    DockerImage,
    Duration,
    RemovalPolicy,
    Stack,
    aws_events as events,
    aws_events_targets as targets,
    aws_iam as iam,
    aws_lambda as lambda_,
    aws_logs as logs,
)
from constructs import Construct

from aws_billing_notification.config.schema import DEFAULT_WEBHOOK_PARAMETER


class NotificationStack(Stack):
    """
    Billing Notification infrastructure.

    Creates:
    - Billing Notification Lambda function
    - EventBridge rule running it daily at 01:00 UTC
    - IAM role with CloudWatch read and SSM parameter access
    - Log group with 30-day retention
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        environment: str,
        project_name: str = "aws-billing-notification",
        webhook_parameter: str = DEFAULT_WEBHOOK_PARAMETER,
        schedule_hour_utc: int = 1,
        version: str = "0.0.0",
        code: lambda_.Code | None = None,
        **kwargs,
    ) -> None:
        """
        Initialize the Notification stack.

        Args:
            scope: CDK scope.
            construct_id: Stack ID.
            environment: Deployment environment (dev, staging, prod).
            project_name: Prefix for function and rule names.
            webhook_parameter: Full SSM name of the webhook URL parameter.
            schedule_hour_utc: UTC hour of the daily run.
            version: Application version from VERSION file.
            code: Lambda code; defaults to a Docker-bundled asset of the repo.
        """
        super().__init__(scope, construct_id, **kwargs)

        self.deploy_env = environment
        self.project_name = project_name
        self.webhook_parameter = webhook_parameter
        self.schedule_hour_utc = schedule_hour_utc
        self.version = version
        self.code = code or self._bundled_code()

        self.role = self._create_role()
        self.notification_function = self._create_function()
        self._create_log_group()
        self._create_schedule()

    def _create_role(self) -> iam.Role:
        """Create the execution role."""
        role = iam.Role(
            self,
            "BillingNotificationRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "service-role/AWSLambdaBasicExecutionRole"
                ),
                iam.ManagedPolicy.from_aws_managed_policy_name("CloudWatchReadOnlyAccess"),
            ],
        )
        role.add_to_policy(
            iam.PolicyStatement(
                sid="SsmParameterStoreAccess",
                effect=iam.Effect.ALLOW,
                actions=["ssm:GetParameter*"],
                resources=[self.parameter_arn_pattern],
            )
        )
        return role

    @property
    def parameter_arn_pattern(self) -> str:
        """ARN granted to the function: the parameter's parent path, or the parameter itself."""
        name = "/" + self.webhook_parameter.lstrip("/")
        parent = name.rsplit("/", 1)[0]
        resource = f"{parent}/*" if parent else name
        return f"arn:aws:ssm:{self.region}:{self.account}:parameter{resource}"

    @staticmethod
    def _bundled_code() -> lambda_.Code:
        """Package the handler and its runtime dependencies with Docker."""
        return lambda_.Code.from_asset(
            ".",
            bundling=BundlingOptions(
                image=DockerImage.from_registry(
                    "public.ecr.aws/sam/build-python3.12:latest"
                ),
                command=[
                    "bash",
                    "-c",
                    "pip install -r requirements-lambda.txt -t /asset-output && "
                    "cp -r src/aws_billing_notification /asset-output/ && "
                    "cp -r config /asset-output/",
                ],
            ),
            exclude=[
                "cdk.out",
                ".git",
                ".venv",
                "*.pyc",
                "__pycache__",
                ".pytest_cache",
                "tests",
                "*.md",
            ],
        )

    def _create_function(self) -> lambda_.Function:
        """Create the Billing Notification Lambda function."""
        return lambda_.Function(
            self,
            "BillingNotificationFunction",
            function_name=f"{self.project_name}-{self.deploy_env}",
            runtime=lambda_.Runtime.PYTHON_3_12,
            architecture=lambda_.Architecture.ARM_64,
            handler="aws_billing_notification.handlers.billing_notification.handler",
            role=self.role,
            code=self.code,
            timeout=Duration.seconds(10),
            memory_size=256,
            environment={
                "CONFIG_ENV": self.deploy_env,
                "CONFIG_DIR": "/var/task/config",
                "WEBHOOK_PARAMETER_NAME": self.webhook_parameter,
                "APP_VERSION": self.version,
            },
            description="Posts daily AWS estimated charges per service to Slack",
        )

    def _create_log_group(self) -> logs.LogGroup:
        """Create the function's log group with bounded retention."""
        return logs.LogGroup(
            self,
            "BillingNotificationLog",
            log_group_name=f"/aws/lambda/{self.notification_function.function_name}",
            retention=logs.RetentionDays.ONE_MONTH,
            removal_policy=RemovalPolicy.DESTROY,
        )

    def _create_schedule(self) -> None:
        """Create the daily EventBridge schedule."""
        rule = events.Rule(
            self,
            "BillingNotificationSchedule",
            rule_name=f"{self.project_name}-{self.deploy_env}",
            description=f"Trigger billing notification at {self.schedule_hour_utc:02d}:00 UTC",
            schedule=events.Schedule.cron(
                minute="0",
                hour=str(self.schedule_hour_utc),
            ),
        )
        rule.add_target(targets.LambdaFunction(self.notification_function))

    @property
    def function_arn(self) -> str:
        """Get the Lambda function ARN."""
        return self.notification_function.function_arn
