"""Cloudflare zone cache purge."""

import logging

import requests

from .config import CloudflareCredentials

logger = logging.getLogger(__name__)

CLOUDFLARE_API_URL = "https://api.cloudflare.com/client/v4"


def purge_everything(
  credentials: CloudflareCredentials,
  session: requests.Session | None = None,
) -> str | None:
  """Purge the whole cache of a zone.

  Purging by hostname is only available on the enterprise plan, so the entire
  zone is purged.

  Args:
    credentials: Account email, global API key and zone to purge
    session: HTTP session to send the request with

  Returns:
    The purge request ID, or None if Cloudflare rejected the request
  """
  http = session or requests.Session()
  response = http.post(
    f"{CLOUDFLARE_API_URL}/zones/{credentials.zone_id}/purge_cache",
    headers={
      "X-Auth-Email": credentials.email,
      "X-Auth-Key": credentials.api_key,
      "Content-Type": "application/json",
    },
    json={"purge_everything": True},
  )

  try:
    body = response.json()
  except ValueError:
    body = {}

  if response.ok and body.get("success"):
    result = body.get("result") or {}
    return result.get("id")

  logger.warning(
    "[Cloudflare] Purge rejected (HTTP %s): %s",
    response.status_code,
    body.get("errors") or response.text,
  )
  return None
