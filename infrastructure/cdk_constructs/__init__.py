"""CDK constructs for CloudFront static website infrastructure."""

from .certificate import ImportedCertificate
from .distribution import CloudFrontDistribution
from .site_content import SiteContent
from .static_site import StaticWebsiteConstruct
from .storage import StorageBucket

__all__ = [
  "CloudFrontDistribution",
  "ImportedCertificate",
  "SiteContent",
  "StaticWebsiteConstruct",
  "StorageBucket",
]
