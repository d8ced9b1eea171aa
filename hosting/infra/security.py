"""Security group for the game ports."""

from __future__ import annotations

from aws_cdk import aws_ec2 as ec2
from constructs import Construct

# (port, description); all UDP, open to any IPv4 source
GAME_PORTS: tuple[tuple[int, str], ...] = (
    (7777, "Game port"),
    (15000, "Beacon port"),
    (15777, "Query port"),
)


def build_security_group(scope: Construct, prefix: str, vpc: ec2.IVpc) -> ec2.SecurityGroup:
    """Create the server security group with one ingress rule per game port.

    Egress is left at the default allow-all.
    """
    security_group = ec2.SecurityGroup(
        scope,
        f"{prefix}ServerSecurityGroup",
        vpc=vpc,
        description="Allow Satisfactory client to connect to server",
    )
    for port, description in GAME_PORTS:
        security_group.add_ingress_rule(ec2.Peer.any_ipv4(), ec2.Port.udp(port), description)
    return security_group
