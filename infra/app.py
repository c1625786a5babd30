#!/usr/bin/env python3
"""CDK App for the uppercase API infrastructure."""

import aws_cdk as cdk

from infra.descriptor import DescriptorConfig, build_descriptor
from infra.stacks import UppercaseApiStack
from uppercase.infrastructure import configure_logging

configure_logging("uppercase-infra")

app = cdk.App()

env = cdk.Environment(
    account=app.node.try_get_context("account") or None,
    region=app.node.try_get_context("region") or "us-east-1",
)

config = DescriptorConfig(
    project=app.node.try_get_context("project") or "uppercase-api",
    stack=app.node.try_get_context("stack") or "dev",
    artifact_path=app.node.try_get_context("artifact") or "handler.zip",
    response_format=app.node.try_get_context("response_format") or "raw",
)

# API Gateway + Lambda, named <project>-<stack>-*
UppercaseApiStack(
    app,
    config.prefix,
    graph=build_descriptor(config),
    env=env,
)

app.synth()
