"""Uppercase API Stack - renders the descriptor's resource graph."""

from typing import Any

from aws_cdk import Aws, CfnOutput, CfnResource, Fn, Stack, Token
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_s3_assets as s3_assets
from constructs import Construct

from ..descriptor import (
    Artifact,
    DescriptorError,
    Join,
    Pseudo,
    Ref,
    ResourceGraph,
    ResourceKind,
    ResourceNode,
)

PSEUDO_VALUES = {
    Pseudo.ACCOUNT_ID: Aws.ACCOUNT_ID,
    Pseudo.REGION: Aws.REGION,
    Pseudo.PARTITION: Aws.PARTITION,
    Pseudo.URL_SUFFIX: Aws.URL_SUFFIX,
}


class UppercaseApiStack(Stack):
    """API Gateway REST API proxying every path to the uppercase Lambda."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        graph: ResourceGraph,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.graph = graph
        self.resources: dict[str, CfnResource] = {}

        renderers = {
            ResourceKind.ROLE: self._role,
            ResourceKind.POLICY: self._policy,
            ResourceKind.FUNCTION: self._function,
            ResourceKind.API: self._rest_api,
            ResourceKind.RESOURCE: self._api_resource,
            ResourceKind.METHOD: self._method,
            ResourceKind.PERMISSION: self._permission,
            ResourceKind.DEPLOYMENT: self._deployment,
            ResourceKind.STAGE: self._stage,
        }
        # Kinds rendered into the node they are attached to
        attachers = {
            ResourceKind.INTEGRATION: self._attach_integration,
        }

        # Declaration order is a topological order of the graph
        for node in graph:
            props = self._resolve(node.properties, node.name)
            if node.attach_to:
                attach = attachers.get(node.kind)
                if attach is None:
                    raise DescriptorError(
                        f"Resource '{node.name}' of kind '{node.kind.value}' cannot be attached"
                    )
                resource = self.resources[node.attach_to]
                attach(node, props, resource)
            else:
                render = renderers.get(node.kind)
                if render is None:
                    raise DescriptorError(
                        f"Resource '{node.name}' of kind '{node.kind.value}' "
                        "must be attached to another resource"
                    )
                resource = render(node, props)
            self.resources[node.name] = resource

            for dependency in node.depends_on:
                target = self.resources[dependency]
                if target is not resource:
                    resource.add_dependency(target)

        for output in graph.outputs:
            CfnOutput(
                self,
                output.name,
                value=self._resolve(output.value, output.name),
                description=output.description,
            )

    # Renderers, one per resource kind

    def _role(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(node, props, required=("AssumeRolePolicyDocument",), optional=("RoleName",))
        return iam.CfnRole(
            self,
            node.name,
            role_name=props.get("RoleName"),
            assume_role_policy_document=props["AssumeRolePolicyDocument"],
        )

    def _policy(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(node, props, required=("PolicyName", "PolicyDocument", "Roles"))
        return iam.CfnPolicy(
            self,
            node.name,
            policy_name=props["PolicyName"],
            policy_document=props["PolicyDocument"],
            roles=props["Roles"],
        )

    def _function(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(
            node,
            props,
            required=("Code", "Role", "Handler", "Runtime"),
            optional=("FunctionName", "Environment"),
        )
        environment = props.get("Environment")
        return lambda_.CfnFunction(
            self,
            node.name,
            function_name=props.get("FunctionName"),
            handler=props["Handler"],
            runtime=props["Runtime"],
            role=props["Role"],
            code=lambda_.CfnFunction.CodeProperty(
                s3_bucket=props["Code"]["S3Bucket"],
                s3_key=props["Code"]["S3Key"],
            ),
            environment=(
                lambda_.CfnFunction.EnvironmentProperty(variables=environment["Variables"])
                if environment
                else None
            ),
        )

    def _rest_api(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(node, props, required=("Name",), optional=("Description", "Policy"))
        return apigw.CfnRestApi(
            self,
            node.name,
            name=props["Name"],
            description=props.get("Description"),
            policy=props.get("Policy"),
        )

    def _api_resource(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(node, props, required=("RestApiId", "ParentId", "PathPart"))
        return apigw.CfnResource(
            self,
            node.name,
            rest_api_id=props["RestApiId"],
            parent_id=props["ParentId"],
            path_part=props["PathPart"],
        )

    def _method(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(
            node,
            props,
            required=("RestApiId", "ResourceId", "HttpMethod"),
            optional=("AuthorizationType",),
        )
        return apigw.CfnMethod(
            self,
            node.name,
            rest_api_id=props["RestApiId"],
            resource_id=props["ResourceId"],
            http_method=props["HttpMethod"],
            authorization_type=props.get("AuthorizationType"),
        )

    def _attach_integration(self, node: ResourceNode, props: dict, method: CfnResource) -> None:
        if not isinstance(method, apigw.CfnMethod):
            raise DescriptorError(
                f"Integration '{node.name}' must be attached to a method, not '{node.attach_to}'"
            )
        _check(node, props, required=("Type", "Uri"), optional=("IntegrationHttpMethod",))
        method.integration = apigw.CfnMethod.IntegrationProperty(
            type=props["Type"],
            integration_http_method=props.get("IntegrationHttpMethod"),
            uri=props["Uri"],
        )

    def _permission(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(
            node,
            props,
            required=("Action", "FunctionName", "Principal"),
            optional=("SourceArn",),
        )
        return lambda_.CfnPermission(
            self,
            node.name,
            action=props["Action"],
            function_name=props["FunctionName"],
            principal=props["Principal"],
            source_arn=props.get("SourceArn"),
        )

    def _deployment(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(node, props, required=("RestApiId",), optional=("Description",))
        return apigw.CfnDeployment(
            self,
            node.name,
            rest_api_id=props["RestApiId"],
            description=props.get("Description"),
        )

    def _stage(self, node: ResourceNode, props: dict) -> CfnResource:
        _check(node, props, required=("RestApiId", "DeploymentId"), optional=("StageName",))
        return apigw.CfnStage(
            self,
            node.name,
            rest_api_id=props["RestApiId"],
            deployment_id=props["DeploymentId"],
            stage_name=props.get("StageName"),
        )

    def _resolve(self, value: Any, owner: str) -> Any:
        """Turn symbolic values into CloudFormation intrinsics."""
        if isinstance(value, Ref):
            target = self.resources[value.node]
            if value.attribute is None:
                return target.ref
            return Token.as_string(target.get_att(value.attribute))
        if isinstance(value, Pseudo):
            return PSEUDO_VALUES[value]
        if isinstance(value, Join):
            return Fn.join("", [self._resolve(part, owner) for part in value.parts])
        if isinstance(value, Artifact):
            asset = s3_assets.Asset(self, f"{owner}-artifact", path=value.path)
            return {"S3Bucket": asset.s3_bucket_name, "S3Key": asset.s3_object_key}
        if isinstance(value, dict):
            return {key: self._resolve(item, owner) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._resolve(item, owner) for item in value]
        return value


def _check(
    node: ResourceNode,
    props: dict,
    required: tuple[str, ...],
    optional: tuple[str, ...] = (),
) -> None:
    """Reject misspelled or missing properties before synthesis."""
    unknown = sorted(set(props) - set(required) - set(optional))
    if unknown:
        raise DescriptorError(
            f"Resource '{node.name}' has unsupported properties: {', '.join(unknown)}"
        )
    missing = [key for key in required if key not in props]
    if missing:
        raise DescriptorError(
            f"Resource '{node.name}' is missing properties: {', '.join(missing)}"
        )
