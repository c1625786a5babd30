"""IAM policy documents used by the descriptor."""

POLICY_VERSION = "2012-10-17"

LAMBDA_SERVICE = "lambda.amazonaws.com"
APIGATEWAY_SERVICE = "apigateway.amazonaws.com"


def lambda_trust_policy() -> dict:
    """Allow the Lambda service to assume the execution role."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Sid": "",
                "Effect": "Allow",
                "Principal": {"Service": LAMBDA_SERVICE},
                "Action": "sts:AssumeRole",
            }
        ],
    }


def log_policy() -> dict:
    """Allow the function to create and write CloudWatch log streams."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Effect": "Allow",
                "Action": [
                    "logs:CreateLogGroup",
                    "logs:CreateLogStream",
                    "logs:PutLogEvents",
                ],
                "Resource": "arn:aws:logs:*:*:*",
            }
        ],
    }


def gateway_policy() -> dict:
    """REST API resource policy.

    Grants execute-api:Invoke to any principal on any resource.
    TODO: scope the invoke statement once the security review of the open
    front door is done.
    """
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Action": "sts:AssumeRole",
                "Principal": {"Service": LAMBDA_SERVICE},
                "Effect": "Allow",
                "Sid": "",
            },
            {
                "Action": "execute-api:Invoke",
                "Resource": "*",
                "Principal": "*",
                "Effect": "Allow",
                "Sid": "",
            },
        ],
    }
