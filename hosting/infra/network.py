"""Bind VPC and subnet choices to CDK lookups."""

from __future__ import annotations

from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from hosting.base.resolution import ExplicitSubnet, ExplicitVpc, SubnetChoice, VpcChoice


def bind_vpc(scope: Construct, prefix: str, choice: VpcChoice) -> ec2.IVpc:
    """Look up the chosen VPC.

    Lookups are resolved by the CDK CLI at synth time; an unknown id or a
    region without a default VPC fails the deployment.
    """
    if isinstance(choice, ExplicitVpc):
        return ec2.Vpc.from_lookup(scope, f"{prefix}Vpc", vpc_id=choice.vpc_id)
    return ec2.Vpc.from_lookup(scope, f"{prefix}Vpc", is_default=True)


def bind_subnets(scope: Construct, prefix: str, choice: SubnetChoice) -> ec2.SubnetSelection:
    if isinstance(choice, ExplicitSubnet):
        subnet = ec2.Subnet.from_subnet_attributes(
            scope,
            f"{prefix}ServerSubnet",
            subnet_id=choice.subnet_id,
            availability_zone=choice.availability_zone,
        )
        return ec2.SubnetSelection(subnets=[subnet])
    # server needs a public ip to allow connections
    return ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC)
