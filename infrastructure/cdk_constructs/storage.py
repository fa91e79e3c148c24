"""Private S3 origin bucket for a CloudFront-served website."""

from aws_cdk import Duration, RemovalPolicy
from aws_cdk import aws_s3 as s3
from constructs import Construct

# Noncurrent object versions are permanently deleted after this many days
NONCURRENT_VERSION_RETENTION_DAYS = 30


class StorageBucket(Construct):
  """Versioned, private S3 bucket only readable through CloudFront."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket_name: str,
    resource_prefix: str,
    dev_mode: bool = False,
  ) -> None:
    super().__init__(scope, id)

    removal_policy = RemovalPolicy.DESTROY if dev_mode else RemovalPolicy.RETAIN

    self.bucket = s3.Bucket(
      self,
      resource_prefix,
      bucket_name=bucket_name,
      block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
      encryption=s3.BucketEncryption.S3_MANAGED,
      enforce_ssl=True,
      versioned=True,
      lifecycle_rules=[
        s3.LifecycleRule(
          id=(
            f"{resource_prefix}-delete-noncurrent-after-"
            f"{NONCURRENT_VERSION_RETENTION_DAYS}-days"
          ),
          enabled=True,
          noncurrent_version_expiration=Duration.days(NONCURRENT_VERSION_RETENTION_DAYS),
        )
      ],
      removal_policy=removal_policy,
      auto_delete_objects=dev_mode,
    )
