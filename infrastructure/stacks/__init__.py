"""CDK stacks for CloudFront static website infrastructure."""

from .website_stack import CloudFrontWebsiteStack

__all__ = ["CloudFrontWebsiteStack"]
