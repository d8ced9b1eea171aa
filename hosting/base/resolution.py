"""
Placement decisions for the network, subnet and saves bucket.

Each optional identifier in the deployment config becomes an explicit
tagged choice.  The functions here are pure (no CDK, no AWS calls) so the
"all present", "all absent" and "partially present" cases can each be
named and checked on their own; :mod:`hosting.infra` binds the choices to
real constructs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from .logger import hosting_logger

if TYPE_CHECKING:
    from .config import DeploymentConfig


# ── Network ───────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ExplicitVpc:
    """Look up the VPC with this id."""

    vpc_id: str


@dataclass(frozen=True)
class DefaultVpc:
    """Look up the account's default VPC in the target region."""


VpcChoice = Union[ExplicitVpc, DefaultVpc]


def choose_vpc(vpc_id: str | None) -> VpcChoice:
    if vpc_id:
        return ExplicitVpc(vpc_id)
    return DefaultVpc()


# ── Subnet ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ExplicitSubnet:
    """Place the server in exactly this subnet."""

    subnet_id: str
    availability_zone: str


@dataclass(frozen=True)
class AnyPublicSubnet:
    """Let the provider pick from the VPC's public subnets.

    Attributes:
        ignored: Names of placement settings that were supplied without
            their counterpart and therefore had no effect.
    """

    ignored: tuple[str, ...] = ()

    @property
    def partial(self) -> bool:
        return bool(self.ignored)


SubnetChoice = Union[ExplicitSubnet, AnyPublicSubnet]


def choose_subnet(subnet_id: str | None, availability_zone: str | None) -> SubnetChoice:
    """Pick the server subnet.

    A subnet id is only honoured together with its availability zone.
    When exactly one of the two is given it is ignored and any public
    subnet is used; the ignored setting is recorded on the choice and
    logged as a warning.
    """
    if subnet_id and availability_zone:
        return ExplicitSubnet(subnet_id, availability_zone)

    ignored: tuple[str, ...] = ()
    if subnet_id:
        ignored = ("subnet_id",)
    elif availability_zone:
        ignored = ("availability_zone",)
    if ignored:
        hosting_logger.warning(
            f"Ignoring {ignored[0]}: subnet_id and availability_zone must be set together; "
            "falling back to any public subnet",
            component="resolution",
            operation="choose_subnet",
        )
    return AnyPublicSubnet(ignored)


# ── Storage ───────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ExistingBucket:
    """Reference an existing bucket by name."""

    bucket_name: str


@dataclass(frozen=True)
class NewBucket:
    """Create a bucket with a provider-generated name."""


BucketChoice = Union[ExistingBucket, NewBucket]


def choose_bucket(bucket_name: str | None) -> BucketChoice:
    if bucket_name:
        return ExistingBucket(bucket_name)
    return NewBucket()


# ── Plan ──────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class DeploymentPlan:
    """Every configuration-driven decision the stack makes."""

    vpc: VpcChoice
    subnet: SubnetChoice
    bucket: BucketChoice
    control_api: bool
    use_experimental_build: bool

    def describe(self) -> dict[str, Any]:
        """Return a JSON-friendly summary of the plan."""

        def _tag(choice: Any) -> dict[str, Any]:
            return {"kind": type(choice).__name__, **choice.__dict__}

        return {
            "vpc": _tag(self.vpc),
            "subnet": _tag(self.subnet),
            "bucket": _tag(self.bucket),
            "control_api": self.control_api,
            "use_experimental_build": self.use_experimental_build,
        }


def plan_deployment(config: DeploymentConfig) -> DeploymentPlan:
    """Resolve all placement choices for *config*."""
    return DeploymentPlan(
        vpc=choose_vpc(config.vpc_id),
        subnet=choose_subnet(config.subnet_id, config.availability_zone),
        bucket=choose_bucket(config.bucket_name),
        control_api=config.restart_api,
        use_experimental_build=config.use_experimental_build,
    )


__all__ = [
    "ExplicitVpc",
    "DefaultVpc",
    "VpcChoice",
    "choose_vpc",
    "ExplicitSubnet",
    "AnyPublicSubnet",
    "SubnetChoice",
    "choose_subnet",
    "ExistingBucket",
    "NewBucket",
    "BucketChoice",
    "choose_bucket",
    "DeploymentPlan",
    "plan_deployment",
]
