"""CloudFront distribution for static website."""

from collections.abc import Sequence

from aws_cdk import Duration
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct

DNS_WARNING = "Delete associated DNS records before this distribution is recreated."

# CloudFront rejects distribution comments longer than this
MAX_COMMENT_LENGTH = 128

# Status codes rewritten to the index page so front-end routing keeps working
# on page reloads (403) and deep links (404)
ROUTED_ERROR_STATUSES = (403, 404)
ERROR_RESPONSE_TTL = Duration.seconds(60)


def distribution_comment(description: str) -> str:
  return f"{description} | {DNS_WARNING}"[:MAX_COMMENT_LENGTH]


class CloudFrontDistribution(Construct):
  """CloudFront distribution reading a private S3 bucket through Origin Access Control."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    domain_name: str,
    description: str,
    allowed_countries: Sequence[str],
    certificate: acm.ICertificate | None = None,
    resource_prefix: str = "",
  ) -> None:
    super().__init__(scope, id)

    prefix = resource_prefix or "Website"

    # Only the distribution may read from the bucket; the origin helper also
    # adds the matching s3:GetObject statement to the bucket policy
    self.origin_access_control = cloudfront.S3OriginAccessControl(
      self,
      f"{prefix}-oac",
      origin_access_control_name=f"{prefix}-oac",
      description=f"OAC for website origin S3 bucket {prefix}",
      signing=cloudfront.Signing.SIGV4_ALWAYS,
    )
    origin = origins.S3BucketOrigin.with_origin_access_control(
      bucket,
      origin_access_control=self.origin_access_control,
    )

    # Without a certificate the distribution is served over plain HTTP on its
    # default cloudfront.net hostname
    use_tls = certificate is not None

    self.distribution = cloudfront.Distribution(
      self,
      f"{prefix}-cdn",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origin,
        allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD_OPTIONS,
        cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD_OPTIONS,
        cache_policy=cloudfront.CachePolicy.CACHING_OPTIMIZED,
        compress=True,
        origin_request_policy=cloudfront.OriginRequestPolicy.CORS_S3_ORIGIN,
        response_headers_policy=(
          cloudfront.ResponseHeadersPolicy.CORS_ALLOW_ALL_ORIGINS_WITH_PREFLIGHT_AND_SECURITY_HEADERS
        ),
        viewer_protocol_policy=(
          cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS
          if use_tls
          else cloudfront.ViewerProtocolPolicy.ALLOW_ALL
        ),
      ),
      certificate=certificate,
      domain_names=[domain_name] if use_tls else None,
      minimum_protocol_version=(
        cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021 if use_tls else None
      ),
      ssl_support_method=cloudfront.SSLMethod.SNI if use_tls else None,
      comment=distribution_comment(description),
      default_root_object="index.html",
      enabled=True,
      enable_ipv6=True,
      enable_logging=False,
      error_responses=self._error_responses(),
      geo_restriction=cloudfront.GeoRestriction.allowlist(*allowed_countries),
      http_version=cloudfront.HttpVersion.HTTP2_AND_3,
      price_class=cloudfront.PriceClass.PRICE_CLASS_100,
      publish_additional_metrics=False,
    )

  @staticmethod
  def _error_responses() -> list[cloudfront.ErrorResponse]:
    """Serve the index page for forbidden and missing paths."""
    return [
      cloudfront.ErrorResponse(
        http_status=status,
        response_http_status=200,
        response_page_path="/index.html",
        ttl=ERROR_RESPONSE_TTL,
      )
      for status in ROUTED_ERROR_STATUSES
    ]
