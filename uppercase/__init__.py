"""Lambda function that uppercases the request path."""
