"""Parsing of the outputs file written by ``cdk deploy --outputs-file``.

The file maps each stack name to its CloudFormation outputs::

  {"CloudFrontWebsite-dev-example-com": {"bucketNamedevexamplecom...": "...", ...}}

Output keys are matched by prefix since CDK derives them from the output ids.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .errors import ManifestError

logger = logging.getLogger(__name__)


class OutputField(Enum):
  """Stack outputs the deploy script knows about, by key prefix."""

  BUCKET_NAME = "bucketName"
  DISTRIBUTION_ID = "distributionId"
  DISTRIBUTION_HOST_NAME = "distributionHostName"

  @classmethod
  def classify(cls, key: str) -> "OutputField | None":
    """Return the field whose prefix ``key`` starts with, if any."""
    for output_field in cls:
      if key.startswith(output_field.value):
        return output_field
    return None


_ATTRIBUTE_FOR_FIELD = {
  OutputField.BUCKET_NAME: "bucket_name",
  OutputField.DISTRIBUTION_ID: "distribution_id",
  OutputField.DISTRIBUTION_HOST_NAME: "distribution_host_name",
}


@dataclass(frozen=True)
class StackOutputs:
  """Identifiers of one deployed website stack.

  Fields the stack did not output are empty strings. Outputs with an
  unrecognised key are kept in ``unknown_outputs`` rather than dropped.
  """

  stack_name: str
  bucket_name: str = ""
  distribution_id: str = ""
  distribution_host_name: str = ""
  unknown_outputs: Mapping[str, str] = field(default_factory=dict)


def parse_stack_outputs(stack_name: str, outputs: Mapping[str, Any]) -> StackOutputs:
  """Classify the outputs of a single stack."""
  if not isinstance(outputs, Mapping):
    raise ManifestError(f"Outputs of stack {stack_name} must be an object")

  values: dict[str, str] = {}
  unknown: dict[str, str] = {}
  for key, value in outputs.items():
    if not isinstance(value, str):
      raise ManifestError(f"Output {key} of stack {stack_name} must be a string")

    output_field = OutputField.classify(key)
    if output_field is None:
      logger.warning("CDK output name not recognized: %s (value: %s)", key, value)
      unknown[key] = value
    else:
      values[_ATTRIBUTE_FOR_FIELD[output_field]] = value

  return StackOutputs(stack_name=stack_name, unknown_outputs=unknown, **values)


def parse_manifest(data: Any) -> list[StackOutputs]:
  """Parse decoded outputs-file JSON into one record per stack, in file order."""
  if not isinstance(data, Mapping):
    raise ManifestError("CDK outputs file must contain a JSON object")
  return [parse_stack_outputs(stack_name, outputs) for stack_name, outputs in data.items()]


def read_manifest(path: Path | str) -> list[StackOutputs]:
  """Read and parse the outputs file at ``path``."""
  try:
    with open(path) as f:
      data = json.load(f)
  except OSError as e:
    raise ManifestError(f"Cannot read CDK outputs file {path}: {e}") from e
  except json.JSONDecodeError as e:
    raise ManifestError(f"CDK outputs file {path} is not valid JSON: {e}") from e
  return parse_manifest(data)
