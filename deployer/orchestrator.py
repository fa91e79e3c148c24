"""Deploy the website stacks, then purge every cache in front of them."""

import logging
from typing import Any

import requests
from botocore.exceptions import BotoCoreError, ClientError

from . import cloudflare, cloudfront
from .config import DeployConfig
from .log import log_command, log_header, log_spawn_command
from .manifest import StackOutputs, read_manifest
from .pipeline import Pipeline, PipelineReport, Stage
from .runner import Runner, run_command

logger = logging.getLogger(__name__)


class WebsiteDeployer:
  """Runs a full website release.

  Only the CDK deployment is fatal. Once the infrastructure is deployed, a
  failing cache purge or cleanup is logged and the remaining stages still run.
  """

  def __init__(
    self,
    config: DeployConfig,
    *,
    runner: Runner = run_command,
    cloudfront_client: Any = None,
    http: requests.Session | None = None,
  ) -> None:
    self.config = config
    self._run = runner
    self._cloudfront_client = cloudfront_client
    self._http = http
    self.outputs: list[StackOutputs] = []

  def stages(self) -> list[Stage]:
    return [
      Stage("deploy-infrastructure", self.deploy_infrastructure, fatal=True),
      Stage("extract-outputs", self.extract_outputs),
      Stage("invalidate-cloudfront", self.purge_cloudfront_caches),
      Stage("purge-cloudflare", self.purge_cloudflare_cache),
      Stage("cleanup", self.cleanup),
    ]

  def deploy(self) -> PipelineReport:
    report = Pipeline(self.stages()).run()
    if report.failed:
      logger.warning("Deploy finished with failed stages: %s", ", ".join(report.failed))
    return report

  def deploy_infrastructure(self) -> None:
    cdk, *leading_args = self.config.cdk_command
    synth_args = [*leading_args, "synth"]
    deploy_args = [
      *leading_args,
      "deploy",
      "--all",
      "--outputs-file",
      str(self.config.outputs_file),
    ]

    log_spawn_command(cdk, synth_args)
    self._run(cdk, synth_args)

    log_spawn_command(cdk, deploy_args)
    self._run(cdk, deploy_args)

  def extract_outputs(self) -> None:
    log_header("CDK Outputs")
    self.outputs = read_manifest(self.config.outputs_file)

    for outputs in self.outputs:
      logger.info("")
      logger.info("stackName\t\t%s", outputs.stack_name)
      logger.info("s3BucketName\t\t%s", outputs.bucket_name)
      logger.info("distributionId\t\t%s", outputs.distribution_id)
      logger.info("distributionHostName\t%s", outputs.distribution_host_name)

  def purge_cloudfront_caches(self) -> None:
    log_header("CloudFront Cache Purge")
    if not self.outputs:
      logger.warning("[CloudFront] No stack outputs, nothing to invalidate")
      return

    client = self._cloudfront_client or cloudfront.create_client()
    for outputs in self.outputs:
      distribution_id = outputs.distribution_id
      if not distribution_id:
        logger.warning("[CloudFront][%s] No distribution ID output, skipping", outputs.stack_name)
        continue

      try:
        status = cloudfront.invalidate_all_paths(client, distribution_id)
      except (BotoCoreError, ClientError) as e:
        logger.error("[CloudFront][%s] Cache purge status: FAIL (%s)", distribution_id, e)
        continue
      except Exception:
        logger.exception("[CloudFront][%s] Cache purge status: FAIL", distribution_id)
        continue
      logger.info("[CloudFront][%s] Cache purge status: %s", distribution_id, status)

  # TODO: purge several Cloudflare zones when more than one website is configured
  def purge_cloudflare_cache(self) -> None:
    log_header("Cloudflare Cache Purge")

    credentials = self.config.cloudflare
    if credentials is None:
      for name in self.config.missing_cloudflare_vars:
        logger.info("Missing required env variable: %s", name)
      logger.info("[Cloudflare] Skipping cache purge")
      return

    purge_id = cloudflare.purge_everything(credentials, session=self._http)
    if purge_id:
      logger.info("[Cloudflare] Cache purge status: SUCCESS")
    else:
      logger.warning("[Cloudflare] Cache purge status: FAIL")

  def cleanup(self) -> None:
    log_header("Clean up CDK output file if exists")
    log_command(str(self.config.outputs_file))
    try:
      self.config.outputs_file.unlink(missing_ok=True)
    except OSError as e:
      logger.warning("File deletion status: FAIL (%s)", e)
      return
    logger.info("File deletion status: SUCCESS")
