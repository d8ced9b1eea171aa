"""Saves bucket lookup or creation."""

from __future__ import annotations

from aws_cdk import RemovalPolicy
from aws_cdk import aws_s3 as s3
from constructs import Construct

from hosting.base.resolution import BucketChoice, ExistingBucket


def bind_bucket(scope: Construct, prefix: str, choice: BucketChoice) -> s3.IBucket:
    """Reference the existing saves bucket or create one.

    A created bucket gets a generated name and outlives the stack, so
    save files survive instance replacement and stack deletion.
    """
    if isinstance(choice, ExistingBucket):
        return s3.Bucket.from_bucket_name(scope, f"{prefix}SavesBucket", choice.bucket_name)
    return s3.Bucket(scope, f"{prefix}SavesBucket", removal_policy=RemovalPolicy.RETAIN)
