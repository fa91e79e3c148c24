"""Reference to an existing ACM certificate."""

from aws_cdk import aws_certificatemanager as acm
from constructs import Construct


class ImportedCertificate(Construct):
  """ACM certificate issued outside of this app, looked up by ARN.

  CloudFront only accepts certificates from us-east-1.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    certificate_arn: str,
    resource_prefix: str = "",
  ) -> None:
    super().__init__(scope, id)

    self.certificate = acm.Certificate.from_certificate_arn(
      self,
      f"{resource_prefix}-PublicSSLCertificate" if resource_prefix else "Certificate",
      certificate_arn,
    )
