"""Configuration loader for CloudFront-fronted static websites."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_COUNTRIES: tuple[str, ...] = (
  "US",  # United States
  "UM",  # United States Minor Outlying Islands
  "DE",  # Germany
  "FR",  # France
)

REQUIRED_KEYS = ("url", "description", "certificate_arn", "build_output_path")


class ConfigError(ValueError):
  """Raised when the website configuration file is invalid."""


def url_to_id_format(url: str) -> str:
  """Turn a hostname into something usable inside a construct or stack id."""
  return re.sub(r"[^a-z0-9-]+", "-", url, flags=re.IGNORECASE)


def bucket_name_for(url: str) -> str:
  """Derive the origin bucket name for a website hostname.

  Bucket names may only contain lowercase letters, numbers, dots and hyphens,
  anything else is stripped.
  """
  sanitized = re.sub(r"[^a-z0-9.-]+", "", url)
  if sanitized != url:
    logger.warning("Sanitized provided bucket name %s to %s", url, sanitized)
  return f"{sanitized}-static-website"


def resource_id_for(bucket_name: str) -> str:
  """Unique id shared by the bucket's constructs and stack outputs."""
  return re.sub(r"[.-]+", "-", bucket_name)


@dataclass(frozen=True)
class WebsiteConfig:
  """Deployment descriptor for a single static website."""

  url: str
  description: str
  certificate_arn: str
  build_output_path: str
  allowed_countries: tuple[str, ...] = DEFAULT_ALLOWED_COUNTRIES
  force_http: bool = False
  dev_mode: bool = False
  region: str = "us-east-1"

  @property
  def bucket_name(self) -> str:
    return bucket_name_for(self.url)

  @property
  def resource_id(self) -> str:
    return resource_id_for(self.bucket_name)


@dataclass
class Config:
  """Multi-website configuration."""

  websites: list[WebsiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "websites.yaml") -> "Config":
    """Load configuration from YAML file.

    Relative ``build_output_path`` values are resolved against the directory
    holding the YAML file.
    """
    path = Path(path)
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults", {})
    websites: list[WebsiteConfig] = []

    for index, website_data in enumerate(data.get("websites", [])):
      # Merge defaults with website-specific config
      merged: dict[str, Any] = {**defaults, **website_data}

      missing = [key for key in REQUIRED_KEYS if not merged.get(key)]
      if missing:
        raise ConfigError(f"websites[{index}] is missing required key(s): {', '.join(missing)}")

      build_output_path = Path(merged["build_output_path"])
      if not build_output_path.is_absolute():
        build_output_path = path.parent / build_output_path

      countries = merged.get("allowed_countries") or DEFAULT_ALLOWED_COUNTRIES

      websites.append(
        WebsiteConfig(
          url=merged["url"],
          description=merged["description"],
          certificate_arn=merged["certificate_arn"],
          build_output_path=str(build_output_path),
          allowed_countries=tuple(str(code).upper() for code in countries),
          force_http=bool(merged.get("force_http", False)),
          dev_mode=bool(merged.get("dev_mode", False)),
          region=merged.get("region", "us-east-1"),
        )
      )

    return cls(websites=websites)
