"""Tests for the StaticWebsiteConstruct and CloudFrontWebsiteStack."""

import dataclasses

import pytest
from aws_cdk import App, Environment, Stack
from aws_cdk.assertions import Match, Template

from infrastructure.app import stack_name_for
from infrastructure.cdk_constructs import StaticWebsiteConstruct
from infrastructure.cdk_constructs.distribution import MAX_COMMENT_LENGTH
from infrastructure.config import WebsiteConfig
from infrastructure.stacks import CloudFrontWebsiteStack

CERTIFICATE_ARN = (
  "arn:aws:acm:us-east-1:123456789012:certificate/00000000-0000-0000-0000-000000000000"
)


def _synth(website: WebsiteConfig) -> Template:
  app = App()
  stack = Stack(app, "TestStack", env=Environment(region="us-east-1"))
  StaticWebsiteConstruct(stack, "TestWebsite", website=website)
  return Template.from_stack(stack)


class TestStaticWebsiteConstruct:
  """Test the main StaticWebsiteConstruct."""

  @pytest.fixture
  def template(self, website: WebsiteConfig) -> Template:
    """Create a template with default options."""
    return _synth(website)

  def test_creates_private_versioned_bucket(self, template: Template) -> None:
    """Verify the origin bucket is private, encrypted and versioned."""
    template.has_resource_properties(
      "AWS::S3::Bucket",
      {
        "BucketName": "dev.example.com-static-website",
        "VersioningConfiguration": {"Status": "Enabled"},
        "PublicAccessBlockConfiguration": {
          "BlockPublicAcls": True,
          "BlockPublicPolicy": True,
          "IgnorePublicAcls": True,
          "RestrictPublicBuckets": True,
        },
        "BucketEncryption": {
          "ServerSideEncryptionConfiguration": [
            {"ServerSideEncryptionByDefault": {"SSEAlgorithm": "AES256"}}
          ]
        },
      },
    )

  def test_bucket_expires_noncurrent_versions(self, template: Template) -> None:
    """Verify noncurrent object versions are deleted after 30 days."""
    template.has_resource_properties(
      "AWS::S3::Bucket",
      {
        "LifecycleConfiguration": {
          "Rules": [
            {
              "Id": "dev-example-com-static-website-delete-noncurrent-after-30-days",
              "NoncurrentVersionExpiration": {"NoncurrentDays": 30},
              "Status": "Enabled",
            }
          ]
        },
      },
    )

  def test_bucket_is_retained(self, template: Template) -> None:
    """Verify the bucket survives stack deletion outside dev mode."""
    template.has_resource(
      "AWS::S3::Bucket",
      {"DeletionPolicy": "Retain", "UpdateReplacePolicy": "Retain"},
    )
    template.resource_count_is("Custom::S3AutoDeleteObjects", 0)

  def test_bucket_policy_allows_only_cloudfront(self, template: Template) -> None:
    """Verify reads are granted to CloudFront and plain HTTP is denied."""
    template.has_resource_properties(
      "AWS::S3::BucketPolicy",
      {
        "PolicyDocument": {
          "Statement": Match.array_with(
            [
              Match.object_like(
                {
                  "Action": "s3:GetObject",
                  "Effect": "Allow",
                  "Principal": {"Service": "cloudfront.amazonaws.com"},
                  "Condition": {"StringEquals": {"AWS:SourceArn": Match.any_value()}},
                }
              ),
              Match.object_like(
                {
                  "Effect": "Deny",
                  "Condition": {"Bool": {"aws:SecureTransport": "false"}},
                }
              ),
            ]
          ),
        },
      },
    )

  def test_creates_origin_access_control(self, template: Template) -> None:
    """Verify the distribution signs origin requests with SigV4."""
    template.has_resource_properties(
      "AWS::CloudFront::OriginAccessControl",
      {
        "OriginAccessControlConfig": Match.object_like(
          {
            "Name": "dev-example-com-static-website-oac",
            "OriginAccessControlOriginType": "s3",
            "SigningBehavior": "always",
            "SigningProtocol": "sigv4",
          }
        ),
      },
    )

  def test_creates_cloudfront_distribution(self, template: Template) -> None:
    """Verify CloudFront distribution serves the site over TLS."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "Aliases": ["dev.example.com"],
            "DefaultRootObject": "index.html",
            "Enabled": True,
            "HttpVersion": "http2and3",
            "IPV6Enabled": True,
            "PriceClass": "PriceClass_100",
            "ViewerCertificate": {
              "AcmCertificateArn": CERTIFICATE_ARN,
              "MinimumProtocolVersion": "TLSv1.2_2021",
              "SslSupportMethod": "sni-only",
            },
            "DefaultCacheBehavior": Match.object_like(
              {
                "AllowedMethods": ["GET", "HEAD", "OPTIONS"],
                "CachedMethods": ["GET", "HEAD", "OPTIONS"],
                "Compress": True,
                "ViewerProtocolPolicy": "redirect-to-https",
              }
            ),
          }
        ),
      },
    )

  def test_distribution_is_geo_restricted(self, template: Template) -> None:
    """Verify only the default countries may access the site."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "Restrictions": {
              "GeoRestriction": {
                "Locations": ["US", "UM", "DE", "FR"],
                "RestrictionType": "whitelist",
              }
            },
          }
        ),
      },
    )

  def test_error_pages_route_to_index(self, template: Template) -> None:
    """Verify 403 and 404 are answered with the index page."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "CustomErrorResponses": [
              {
                "ErrorCachingMinTTL": 60,
                "ErrorCode": 403,
                "ResponseCode": 200,
                "ResponsePagePath": "/index.html",
              },
              {
                "ErrorCachingMinTTL": 60,
                "ErrorCode": 404,
                "ResponseCode": 200,
                "ResponsePagePath": "/index.html",
              },
            ],
          }
        ),
      },
    )

  def test_distribution_comment_includes_description(self, template: Template) -> None:
    """Verify the description ends up in the distribution comment."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {"Comment": Match.string_like_regexp(r"^dev personal site \| ")}
        ),
      },
    )

  def test_deploys_build_output_and_invalidates(self, template: Template) -> None:
    """Verify the build output is uploaded and the distribution invalidated."""
    template.has_resource_properties(
      "Custom::CDKBucketDeployment",
      {"DistributionId": Match.any_value()},
    )

  def test_deployment_logs_kept_one_month(self, template: Template) -> None:
    """Verify the deployment handler logs are retained for a month."""
    template.has_resource_properties(
      "AWS::Logs::LogGroup",
      {"RetentionInDays": 30},
    )


class TestStaticWebsiteForceHttp:
  """Test StaticWebsiteConstruct served over plain HTTP."""

  @pytest.fixture
  def template(self, website: WebsiteConfig) -> Template:
    """Create a template with TLS disabled."""
    return _synth(dataclasses.replace(website, force_http=True))

  def test_allows_http(self, template: Template) -> None:
    """Verify viewers are not redirected to HTTPS."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "DefaultCacheBehavior": Match.object_like(
              {"ViewerProtocolPolicy": "allow-all"}
            ),
          }
        ),
      },
    )

  def test_no_custom_domain(self, template: Template) -> None:
    """Verify no alias is configured without a certificate."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like({"Aliases": Match.absent()}),
      },
    )


class TestStaticWebsiteDevMode:
  """Test StaticWebsiteConstruct in dev mode."""

  @pytest.fixture
  def template(self, website: WebsiteConfig) -> Template:
    """Create a template in dev mode."""
    return _synth(dataclasses.replace(website, dev_mode=True))

  def test_bucket_is_destroyed(self, template: Template) -> None:
    """Verify the bucket and its objects are removed with the stack."""
    template.has_resource(
      "AWS::S3::Bucket",
      {"DeletionPolicy": "Delete", "UpdateReplacePolicy": "Delete"},
    )
    template.resource_count_is("Custom::S3AutoDeleteObjects", 1)


class TestStaticWebsiteCustomCountries:
  """Test StaticWebsiteConstruct with custom allowed countries."""

  def test_custom_allow_list(self, website: WebsiteConfig) -> None:
    """Verify configured countries replace the defaults."""
    template = _synth(dataclasses.replace(website, allowed_countries=("GB", "IE")))
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "Restrictions": {
              "GeoRestriction": {
                "Locations": ["GB", "IE"],
                "RestrictionType": "whitelist",
              }
            },
          }
        ),
      },
    )

  def test_long_description_is_truncated(self, website: WebsiteConfig) -> None:
    """Verify the distribution comment fits CloudFront's limit."""
    template = _synth(dataclasses.replace(website, description="x" * 200))
    distributions = template.find_resources("AWS::CloudFront::Distribution")
    (distribution,) = distributions.values()
    comment = distribution["Properties"]["DistributionConfig"]["Comment"]
    assert len(comment) == MAX_COMMENT_LENGTH


class TestCloudFrontWebsiteStack:
  """Test the stack wrapping a single website."""

  @pytest.fixture
  def template(self, website: WebsiteConfig) -> Template:
    """Create the stack template."""
    app = App()
    stack = CloudFrontWebsiteStack(
      app,
      stack_name_for(website.url),
      website=website,
      env=Environment(region="us-east-1"),
    )
    return Template.from_stack(stack)

  def test_stack_name(self) -> None:
    """Verify stack names are derived from the website hostname."""
    assert stack_name_for("dev.example.com") == "CloudFrontWebsite-dev-example-com"

  def test_outputs_keep_recognized_prefixes(self, template: Template) -> None:
    """Verify output keys start with the prefixes the deploy script reads."""
    keys = list(template.find_outputs("*"))
    assert len(keys) == 3
    for prefix in ("bucketName", "distributionId", "distributionHostName"):
      assert any(key.startswith(prefix) for key in keys), prefix

  def test_outputs_are_exported(self, template: Template) -> None:
    """Verify outputs are exported under their ids."""
    template.has_output(
      "*",
      {"Export": {"Name": "bucketName-dev-example-com-static-website"}},
    )
    template.has_output(
      "*",
      {"Export": {"Name": "distributionId-dev-example-com-static-website"}},
    )
    template.has_output(
      "*",
      {"Export": {"Name": "distributionHostName-dev-example-com-static-website"}},
    )

  def test_resource_count(self, template: Template) -> None:
    """Verify expected number of key resources."""
    template.resource_count_is("AWS::S3::Bucket", 1)
    template.resource_count_is("AWS::CloudFront::Distribution", 1)
    template.resource_count_is("AWS::CloudFront::OriginAccessControl", 1)
    template.resource_count_is("AWS::CertificateManager::Certificate", 0)
