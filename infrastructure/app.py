#!/usr/bin/env python3
"""CDK application entry point for CloudFront static website infrastructure."""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from infrastructure.config import Config, url_to_id_format
from infrastructure.stacks.website_stack import CloudFrontWebsiteStack

STACK_ID_PREFIX = "CloudFrontWebsite"


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def stack_name_for(url: str) -> str:
  return f"{STACK_ID_PREFIX}-{url_to_id_format(url)}"


def main() -> None:
  """Create CDK app with a stack for each configured website."""
  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "websites.yaml"
  config = Config.from_yaml(Path(config_path))

  # Get account ID from credentials
  account_id = get_account_id()

  for website in config.websites:
    CloudFrontWebsiteStack(
      app,
      stack_name_for(website.url),
      website=website,
      env=cdk.Environment(
        account=account_id,
        region=website.region,
      ),
      description=f"CloudFront static website infrastructure for {website.url}",
    )

  app.synth()


if __name__ == "__main__":
  main()
