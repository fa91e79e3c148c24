"""CloudFront cache invalidation."""

import time
from typing import Any

import boto3

ALL_PATHS = "/*"


def create_client() -> Any:
  return boto3.client("cloudfront")


def invalidate_all_paths(client: Any, distribution_id: str) -> str:
  """Invalidate every cached path of a distribution.

  Args:
    client: boto3 CloudFront client
    distribution_id: ID of the distribution to invalidate

  Returns:
    The invalidation status reported by CloudFront (e.g. ``InProgress``)
  """
  response = client.create_invalidation(
    DistributionId=distribution_id,
    InvalidationBatch={
      "Paths": {
        "Quantity": 1,
        "Items": [ALL_PATHS],
      },
      "CallerReference": str(time.time()),
    },
  )
  return str(response["Invalidation"]["Status"])
