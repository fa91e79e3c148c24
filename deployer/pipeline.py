"""Ordered deploy stages with a fatal / best-effort policy per stage."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stage:
  """A single deploy step.

  A fatal stage aborts the pipeline by re-raising its error. Any other stage
  only has its error logged, and the following stages still run.
  """

  name: str
  action: Callable[[], object]
  fatal: bool = False


@dataclass(frozen=True)
class StageResult:
  name: str
  ok: bool
  error: Exception | None = None


@dataclass
class PipelineReport:
  """Outcome of every stage that ran."""

  results: list[StageResult] = field(default_factory=list)

  @property
  def ok(self) -> bool:
    return all(result.ok for result in self.results)

  @property
  def failed(self) -> list[str]:
    return [result.name for result in self.results if not result.ok]


class Pipeline:
  """Runs stages one after another, never concurrently."""

  def __init__(self, stages: Iterable[Stage]) -> None:
    self.stages = list(stages)

  def run(self) -> PipelineReport:
    report = PipelineReport()
    for stage in self.stages:
      try:
        stage.action()
      except Exception as e:
        if stage.fatal:
          logger.error("Stage %s failed, aborting: %s", stage.name, e)
          raise
        logger.exception("Stage %s failed, continuing", stage.name)
        report.results.append(StageResult(stage.name, ok=False, error=e))
      else:
        report.results.append(StageResult(stage.name, ok=True))
    return report
