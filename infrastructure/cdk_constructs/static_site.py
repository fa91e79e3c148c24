"""Main composite construct for a CloudFront-served static website."""

from constructs import Construct

from ..config import WebsiteConfig
from .certificate import ImportedCertificate
from .distribution import CloudFrontDistribution
from .site_content import SiteContent
from .storage import StorageBucket


class StaticWebsiteConstruct(Construct):
  """Complete static website infrastructure.

  Creates:
  - Private, versioned S3 bucket for the built website files
  - CloudFront distribution reading the bucket through Origin Access Control
  - Deployment of the build output, invalidating the distribution afterwards

  The TLS certificate is imported by ARN unless the website is forced to
  plain HTTP.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    website: WebsiteConfig,
  ) -> None:
    super().__init__(scope, id)

    resource_id = website.resource_id

    # Storage
    self.bucket = StorageBucket(
      self,
      "Storage",
      bucket_name=website.bucket_name,
      resource_prefix=resource_id,
      dev_mode=website.dev_mode,
    )

    # Certificate (issued elsewhere)
    self.certificate: ImportedCertificate | None = None
    if not website.force_http:
      self.certificate = ImportedCertificate(
        self,
        "Certificate",
        certificate_arn=website.certificate_arn,
        resource_prefix=resource_id,
      )

    # CloudFront Distribution
    self.distribution = CloudFrontDistribution(
      self,
      "Distribution",
      bucket=self.bucket.bucket,
      domain_name=website.url,
      description=website.description,
      allowed_countries=website.allowed_countries,
      certificate=self.certificate.certificate if self.certificate else None,
      resource_prefix=resource_id,
    )

    # Built website files
    self.content = SiteContent(
      self,
      "Content",
      bucket=self.bucket.bucket,
      distribution=self.distribution.distribution,
      build_output_path=website.build_output_path,
    )
