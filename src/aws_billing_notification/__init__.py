"""
AWS Billing Notification - daily AWS estimated charges posted to Slack.

A small scheduled Lambda that:
- Reads the AWS/Billing EstimatedCharges metric from CloudWatch
- Breaks the total down per billed service
- Resolves the Slack webhook URL from SSM Parameter Store
- Posts a summary with a per-service table to Slack
"""

__version__ = "0.1.0"
