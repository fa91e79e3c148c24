"""Deploy script for the CloudFront static website stacks."""

from .config import CloudflareCredentials, DeployConfig
from .errors import CommandError, DeployError, ManifestError
from .manifest import OutputField, StackOutputs, parse_manifest, read_manifest
from .orchestrator import WebsiteDeployer
from .pipeline import Pipeline, PipelineReport, Stage
from .runner import CommandResult, run_command

__all__ = [
  "CloudflareCredentials",
  "CommandError",
  "CommandResult",
  "DeployConfig",
  "DeployError",
  "ManifestError",
  "OutputField",
  "Pipeline",
  "PipelineReport",
  "Stage",
  "StackOutputs",
  "WebsiteDeployer",
  "parse_manifest",
  "read_manifest",
  "run_command",
]
