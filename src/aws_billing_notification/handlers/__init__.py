"""Lambda handlers for AWS Billing Notification."""
