"""Upload of the built website files to the origin bucket."""

from pathlib import Path

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_logs as logs
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_deployment as s3_deploy
from constructs import Construct


class SiteContent(Construct):
  """Deploys the website build output to the S3 bucket.

  The distribution is passed along so the files it serves are invalidated
  once the upload finishes.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    distribution: cloudfront.IDistribution,
    build_output_path: str | Path,
  ) -> None:
    super().__init__(scope, id)

    self.deployment = s3_deploy.BucketDeployment(
      self,
      "DeployWebsite",
      sources=[s3_deploy.Source.asset(str(build_output_path))],
      destination_bucket=bucket,
      distribution=distribution,
      log_group=logs.LogGroup(
        self,
        "DeployWebsiteLogs",
        retention=logs.RetentionDays.ONE_MONTH,
      ),
    )
