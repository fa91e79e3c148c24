"""Command line entry point: ``deploy-website``."""

import logging
import sys

from .config import DeployConfig, load_environment
from .errors import DeployError
from .log import configure_logging
from .orchestrator import WebsiteDeployer

logger = logging.getLogger(__name__)


def main() -> None:
  """Deploy all website stacks and purge the CDN caches."""
  configure_logging()

  # Secrets come from .env; the resulting config is fixed for the whole run
  load_environment()

  try:
    config = DeployConfig.from_env()
    WebsiteDeployer(config).deploy()
  except DeployError as e:
    logger.error("Deploy failed: %s", e)
    sys.exit(1)


if __name__ == "__main__":
  main()
