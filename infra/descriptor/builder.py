"""Deployment descriptor for the uppercase API.

Builds the resource graph that wires an API Gateway REST API to the
uppercase Lambda function. Names are derived from the project and stack
only, so building twice with the same config yields the same graph.
"""

import re
from dataclasses import dataclass

import structlog

from uppercase.domain import ResponseFormat
from uppercase.infrastructure.logging import check_log_level

from .graph import ResourceGraph, ResourceKind, ResourceNode
from .policies import APIGATEWAY_SERVICE, gateway_policy, lambda_trust_policy, log_policy
from .values import Artifact, Join, Pseudo, Ref

logger = structlog.get_logger()

DEFAULT_RUNTIME = "python3.12"
DEFAULT_HANDLER = "uppercase.handler.handler"
PROXY_PATH_PART = "{proxy+}"

# IAM role and Lambda function names share this limit
MAX_NAME_LENGTH = 64
NAME_SUFFIXES = (
    "task-exec-role",
    "lambda-log-policy",
    "function",
    "api",
    "gateway-resource",
    "any-method",
    "lambda-integration",
    "api-permission",
    "deployment",
    "stage",
)
_NAME_PART = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class DescriptorConfig:
    """Deploy-time inputs of the descriptor."""

    project: str
    stack: str
    artifact_path: str
    runtime: str = DEFAULT_RUNTIME
    handler: str = DEFAULT_HANDLER
    response_format: str = "raw"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for label, value in (("Project", self.project), ("Stack", self.stack)):
            if not value or not _NAME_PART.match(value):
                raise ValueError(
                    f"{label} name must be non-empty and contain only letters, "
                    "digits, '-' or '_'"
                )
        longest = max(len(self.name(suffix)) for suffix in NAME_SUFFIXES)
        if longest > MAX_NAME_LENGTH:
            raise ValueError(
                f"Resource names cannot exceed {MAX_NAME_LENGTH} characters; "
                f"shorten project or stack ({longest} characters)"
            )
        if not self.artifact_path:
            raise ValueError("Artifact path cannot be empty")
        # Raises ValueError for anything but raw or json
        ResponseFormat(self.response_format)
        check_log_level(self.log_level)

    @property
    def prefix(self) -> str:
        return f"{self.project}-{self.stack}"

    def name(self, suffix: str) -> str:
        """Namespaced resource name ``<project>-<stack>-<suffix>``."""
        return f"{self.prefix}-{suffix}"


def invoke_arn(function: str) -> Join:
    """API Gateway integration URI of a Lambda function node."""
    return Join(
        "arn:",
        Pseudo.PARTITION,
        ":apigateway:",
        Pseudo.REGION,
        ":lambda:path/2015-03-31/functions/",
        Ref(function, "Arn"),
        "/invocations",
    )


def build_descriptor(config: DescriptorConfig) -> ResourceGraph:
    """Build the resource graph for ``config``."""
    graph = ResourceGraph()

    # Execution role with the inline log policy
    role = graph.add(
        ResourceNode(
            kind=ResourceKind.ROLE,
            name=config.name("task-exec-role"),
            properties={
                "RoleName": config.name("task-exec-role"),
                "AssumeRolePolicyDocument": lambda_trust_policy(),
            },
        )
    )
    log_policy_node = graph.add(
        ResourceNode(
            kind=ResourceKind.POLICY,
            name=config.name("lambda-log-policy"),
            properties={
                "PolicyName": config.name("lambda-log-policy"),
                "PolicyDocument": log_policy(),
                "Roles": [Ref(role.name)],
            },
        )
    )

    # The function must not run before it can write logs
    function = graph.add(
        ResourceNode(
            kind=ResourceKind.FUNCTION,
            name=config.name("function"),
            properties={
                "FunctionName": config.name("function"),
                "Handler": config.handler,
                "Runtime": config.runtime,
                "Role": Ref(role.name, "Arn"),
                "Code": Artifact(config.artifact_path),
                "Environment": {
                    "Variables": {
                        "RESPONSE_FORMAT": config.response_format,
                        "LOG_LEVEL": config.log_level,
                    }
                },
            },
            depends_on=(log_policy_node.name,),
        )
    )

    api = graph.add(
        ResourceNode(
            kind=ResourceKind.API,
            name=config.name("api"),
            properties={
                "Name": config.name("api"),
                "Description": f"An API Gateway for the {config.prefix} function",
                "Policy": gateway_policy(),
            },
        )
    )

    # Catch-all route: /{proxy+} with ANY and no authorization
    proxy = graph.add(
        ResourceNode(
            kind=ResourceKind.RESOURCE,
            name=config.name("gateway-resource"),
            properties={
                "RestApiId": Ref(api.name),
                "ParentId": Ref(api.name, "RootResourceId"),
                "PathPart": PROXY_PATH_PART,
            },
        )
    )
    method = graph.add(
        ResourceNode(
            kind=ResourceKind.METHOD,
            name=config.name("any-method"),
            properties={
                "RestApiId": Ref(api.name),
                "ResourceId": Ref(proxy.name),
                "HttpMethod": "ANY",
                "AuthorizationType": "NONE",
            },
        )
    )
    integration = graph.add(
        ResourceNode(
            kind=ResourceKind.INTEGRATION,
            name=config.name("lambda-integration"),
            properties={
                "Type": "AWS_PROXY",
                "IntegrationHttpMethod": "POST",
                "Uri": invoke_arn(function.name),
            },
            attach_to=method.name,
        )
    )

    permission = graph.add(
        ResourceNode(
            kind=ResourceKind.PERMISSION,
            name=config.name("api-permission"),
            properties={
                "Action": "lambda:InvokeFunction",
                "FunctionName": Ref(function.name),
                "Principal": APIGATEWAY_SERVICE,
                "SourceArn": Join(
                    "arn:",
                    Pseudo.PARTITION,
                    ":execute-api:",
                    Pseudo.REGION,
                    ":",
                    Pseudo.ACCOUNT_ID,
                    ":",
                    Ref(api.name),
                    "/*/*/*",
                ),
            },
            depends_on=(proxy.name,),
        )
    )

    deployment = graph.add(
        ResourceNode(
            kind=ResourceKind.DEPLOYMENT,
            name=config.name("deployment"),
            properties={
                "RestApiId": Ref(api.name),
                "Description": "UpperCase API deployment",
            },
            depends_on=(
                proxy.name,
                method.name,
                integration.name,
                function.name,
                permission.name,
            ),
        )
    )
    graph.add(
        ResourceNode(
            kind=ResourceKind.STAGE,
            name=config.name("stage"),
            properties={
                "RestApiId": Ref(api.name),
                "StageName": config.stack,
                "DeploymentId": Ref(deployment.name),
            },
        )
    )

    graph.export("LambdaName", Ref(function.name), "Lambda Name")
    graph.export(
        "InvocationUrl",
        Join(
            "https://",
            Ref(api.name),
            ".execute-api.",
            Pseudo.REGION,
            ".",
            Pseudo.URL_SUFFIX,
            f"/{config.stack}/{{message}}",
        ),
        "invocation URL",
    )

    logger.info(
        "Descriptor built",
        project=config.project,
        stack=config.stack,
        resources=len(graph),
    )
    return graph
