"""AWS service icons (draw.io ``mxgraph.aws4`` resource icons)."""
from types import MappingProxyType

_RESOURCE_ICON = (
    "sketch=0;outlineConnect=0;fontColor=#232F3E;dashed=0;verticalLabelPosition=bottom;"
    "verticalAlign=top;align=center;html=1;fontSize=12;fontStyle=0;aspect=fixed;"
    "shape=mxgraph.aws4.resourceIcon;resIcon=mxgraph.aws4.{icon};"
)


def _icon(name: str) -> str:
    return _RESOURCE_ICON.format(icon=name)


AWS_SHAPES = MappingProxyType({
    "aws.ec2": _icon("ec2"),
    "aws.lambda": _icon("lambda"),
    "aws.ecs": _icon("ecs"),
    "aws.eks": _icon("eks"),
    "aws.s3": _icon("s3"),
    "aws.rds": _icon("rds"),
    "aws.dynamodb": _icon("dynamodb"),
    "aws.elasticache": _icon("elasticache"),
    "aws.api-gateway": _icon("api_gateway"),
    "aws.cloudfront": _icon("cloudfront"),
    "aws.route53": _icon("route_53"),
    "aws.elb": _icon("elastic_load_balancing"),
    "aws.sqs": _icon("sqs"),
    "aws.sns": _icon("sns"),
    "aws.kinesis": _icon("kinesis"),
    "aws.cloudwatch": _icon("cloudwatch_2"),
    "aws.iam": _icon("identity_and_access_management"),
    "aws.cognito": _icon("cognito"),
    "aws.vpc": "points=[];outlineConnect=0;html=1;whiteSpace=wrap;fontSize=12;fontStyle=0;container=1;"
               "shape=mxgraph.aws4.group;grIcon=mxgraph.aws4.group_vpc;verticalAlign=top;align=left;"
               "spacingLeft=30;dashed=0;",
    "aws.step-functions": _icon("step_functions"),
})
