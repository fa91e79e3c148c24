"""CDK stack for a single CloudFront-served static website."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.cdk_constructs import StaticWebsiteConstruct
from infrastructure.config import WebsiteConfig

# Output id prefixes read back by the deploy script from the outputs file
BUCKET_NAME_OUTPUT = "bucketName"
DISTRIBUTION_ID_OUTPUT = "distributionId"
DISTRIBUTION_HOST_NAME_OUTPUT = "distributionHostName"


class CloudFrontWebsiteStack(cdk.Stack):
  """Stack for a single static website."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    website: WebsiteConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.website = StaticWebsiteConstruct(self, "Website", website=website)

    bucket = self.website.bucket.bucket
    distribution = self.website.distribution.distribution
    resource_id = website.resource_id

    # Outputs live at stack scope so their logical ids keep the prefixes
    self._output(
      f"{BUCKET_NAME_OUTPUT}-{resource_id}",
      bucket.bucket_name,
      "S3 bucket name",
    )
    self._output(
      f"{DISTRIBUTION_ID_OUTPUT}-{resource_id}",
      distribution.distribution_id,
      "CloudFront distribution ID",
    )
    self._output(
      f"{DISTRIBUTION_HOST_NAME_OUTPUT}-{resource_id}",
      distribution.distribution_domain_name,
      "CloudFront domain name",
    )

    # Tags
    cdk.Tags.of(self).add("Project", "cloudfront-website")
    cdk.Tags.of(self).add("Website", website.url)

  def _output(self, name: str, value: str, description: str) -> cdk.CfnOutput:
    return cdk.CfnOutput(
      self,
      name,
      value=value,
      description=description,
      export_name=name,
    )
