#!/usr/bin/env python3
"""CDK application entry point for AWS Billing Notification."""

import os
from pathlib import Path

import aws_cdk as cdk
from aws_cdk import aws_lambda as lambda_

from aws_billing_notification.config import Config, load_config
from cdk.stacks.notification_stack import NotificationStack

CONFIG_DIR = Path(__file__).parent.parent / "config"


def _get_version() -> str:
    """Read version from VERSION file."""
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "0.0.0"


def create_stack(
    app: cdk.App,
    config: Config,
    version: str = "0.0.0",
    env: cdk.Environment | None = None,
    code: lambda_.Code | None = None,
) -> NotificationStack:
    """Build the notification stack from the validated configuration."""
    notification_stack = NotificationStack(
        app,
        f"BillingNotification-{config.environment}",
        environment=config.environment,
        project_name=config.project_name,
        webhook_parameter=config.webhook.parameter_name,
        schedule_hour_utc=config.schedule.hour_utc,
        version=version,
        code=code,
        env=env,
    )

    tags = {**config.tags, "Environment": config.environment}
    for key, value in tags.items():
        cdk.Tags.of(notification_stack).add(key, value)

    cdk.CfnOutput(
        notification_stack,
        "NotificationFunctionArn",
        value=notification_stack.function_arn,
        description="Billing Notification Lambda ARN",
    )
    return notification_stack


def main():
    """Create and synthesize the CDK application."""
    app = cdk.App()

    environment = app.node.try_get_context("environment") or os.environ.get(
        "CONFIG_ENV", "dev"
    )
    config = load_config(config_path=CONFIG_DIR, environment=environment)

    aws_env = cdk.Environment(
        account=os.environ.get("CDK_DEFAULT_ACCOUNT"),
        region=os.environ.get("CDK_DEFAULT_REGION", "us-east-1"),
    )

    create_stack(app, config, version=_get_version(), env=aws_env)
    app.synth()


if __name__ == "__main__":
    main()
