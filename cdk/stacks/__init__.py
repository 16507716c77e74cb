"""CDK stacks for AWS Billing Notification."""

from cdk.stacks.notification_stack import NotificationStack

__all__ = ["NotificationStack"]
