"""AWS implementations: EC2 instance control and the Lambda handlers."""
