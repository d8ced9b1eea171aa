"""
The game server instance and its first-boot bootstrap.

Sizing, image line and disk are fixed.  The image comes from the SSM
parameter Canonical publishes for the latest stable Ubuntu 20.04 build,
so a redeploy may pick up a newer AMI.  User data changes replace the
instance: bootstrap commands only run on first boot.
"""

from __future__ import annotations

from pathlib import Path

from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_assets as s3_assets
from constructs import Construct

from hosting.base.exceptions import ConfigurationError

# 4 vCPU, 16 GB RAM should be enough for most factories
INSTANCE_CLASS = ec2.InstanceClass.M5A
INSTANCE_SIZE = ec2.InstanceSize.XLARGE

# https://discourse.ubuntu.com/t/finding-ubuntu-images-with-the-aws-ssm-parameter-store/15507
UBUNTU_AMI_PARAMETER = (
    "/aws/service/canonical/ubuntu/server/20.04/stable/current/amd64/hvm/ebs-gp2/ami-id"
)

ROOT_DEVICE_NAME = "/dev/sda1"
# GiB, for steam, the server and save files
ROOT_VOLUME_SIZE = 30

SSM_MANAGED_POLICY = "AmazonSSMManagedInstanceCore"

# aws cli is needed to download the install asset and to back up saves to s3
BOOTSTRAP_COMMANDS: tuple[str, ...] = (
    "sudo apt-get install unzip -y",
    'curl "https://awscli.amazonaws.com/awscli-exe-linux-x86_64.zip" -o "awscliv2.zip" '
    "&& unzip awscliv2.zip && ./aws/install",
)


def install_arguments(bucket_name: str, use_experimental_build: bool) -> str:
    """Positional arguments for the install script: bucket, then build flag."""
    return f"{bucket_name} {str(use_experimental_build).lower()}"


def provision_server(
    scope: Construct,
    prefix: str,
    *,
    vpc: ec2.IVpc,
    vpc_subnets: ec2.SubnetSelection,
    security_group: ec2.ISecurityGroup,
    saves_bucket: s3.IBucket,
    install_script: Path,
    use_experimental_build: bool,
) -> ec2.Instance:
    """Declare the server instance, its permissions and its bootstrap sequence.

    Args:
        scope: Stack the constructs belong to.
        prefix: Construct id prefix.
        vpc: Network the instance runs in.
        vpc_subnets: Subnet placement.
        security_group: Game port rules.
        saves_bucket: Bucket the server backs up to; the instance role gets
            read/write on it and its name is passed to the install script.
        install_script: Local path of the install script asset.
        use_experimental_build: Passed to the install script.

    Returns:
        The instance construct.

    Raises:
        ConfigurationError: If *install_script* is not a file.
    """
    if not install_script.is_file():
        raise ConfigurationError(f"Install script not found: {install_script}")

    server = ec2.Instance(
        scope,
        f"{prefix}Server",
        instance_type=ec2.InstanceType.of(INSTANCE_CLASS, INSTANCE_SIZE),
        machine_image=ec2.MachineImage.from_ssm_parameter(UBUNTU_AMI_PARAMETER),
        block_devices=[
            ec2.BlockDevice(
                device_name=ROOT_DEVICE_NAME,
                volume=ec2.BlockDeviceVolume.ebs(ROOT_VOLUME_SIZE),
            )
        ],
        vpc=vpc,
        vpc_subnets=vpc_subnets,
        security_group=security_group,
        user_data_causes_replacement=True,
    )

    # Session Manager instead of an inbound SSH port
    server.role.add_managed_policy(
        iam.ManagedPolicy.from_aws_managed_policy_name(SSM_MANAGED_POLICY)
    )
    saves_bucket.grant_read_write(server.role)

    server.user_data.add_commands(*BOOTSTRAP_COMMANDS)

    install_asset = s3_assets.Asset(scope, f"{prefix}InstallAsset", path=str(install_script))
    install_asset.grant_read(server.role)

    local_path = server.user_data.add_s3_download_command(
        bucket=install_asset.bucket,
        bucket_key=install_asset.s3_object_key,
    )
    server.user_data.add_execute_file_command(
        file_path=local_path,
        arguments=install_arguments(saves_bucket.bucket_name, use_experimental_build),
    )
    return server
