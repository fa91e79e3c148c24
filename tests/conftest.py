"""Pytest fixtures for CDK construct and deploy script tests."""

from pathlib import Path

import aws_cdk as cdk
import pytest

from infrastructure.config import WebsiteConfig

CERTIFICATE_ARN = (
  "arn:aws:acm:us-east-1:123456789012:certificate/00000000-0000-0000-0000-000000000000"
)


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def build_output(tmp_path: Path) -> Path:
  """A minimal built website."""
  dist = tmp_path / "dist"
  dist.mkdir()
  (dist / "index.html").write_text("<html><body>hello</body></html>")
  return dist


@pytest.fixture
def website(build_output: Path) -> WebsiteConfig:
  """Website descriptor pointing at the minimal build."""
  return WebsiteConfig(
    url="dev.example.com",
    description="dev personal site",
    certificate_arn=CERTIFICATE_ARN,
    build_output_path=str(build_output),
  )
