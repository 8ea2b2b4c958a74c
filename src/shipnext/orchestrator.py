from __future__ import annotations

"""Plan orchestrator.

CONTRACT
- Inputs: Plan, StepEnv (runner, probe, writer, context, logger)
- Outputs (required):
  - RunReport (state, per-step states, error)
  - Banner before the first step, summary after a completed run
- Invariants:
  - Steps run strictly in order, one at a time
  - A satisfied precondition skips the step and logs its skip message
  - The first BootstrapError aborts that step and halts the plan;
    no later step runs and no summary is printed
  - Never exits the process; the caller maps the report to an exit code
- Failure:
  - Returns RunReport(state=FAILED) on any BootstrapError
  - Other exceptions propagate
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from .artifacts.writer import ConfigWriter
from .config import ProjectContext
from .errors import BootstrapError
from .plans import Plan
from .steps.base import StepEnv, StepState
from .util.log import ConsoleLogger, Logger
from .util.paths import LocalProbe
from .util.shell import ProcessRunner


class RunState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class StepRecord:
    name: str
    state: StepState = StepState.PENDING


@dataclass
class RunReport:
    plan: str
    steps: list[StepRecord]
    state: RunState = RunState.NOT_STARTED
    error: BootstrapError | None = None
    failed_step: str | None = None

    @property
    def ok(self) -> bool:
        return self.state == RunState.COMPLETED

    @property
    def exit_code(self) -> int:
        if self.ok:
            return 0
        return self.error.exit_code if self.error else 1

    def as_dict(self) -> dict[str, Any]:
        return {
            "plan": self.plan,
            "status": self.state.value,
            "steps": {s.name: s.state.value for s in self.steps},
            "failed_step": self.failed_step,
            "error": str(self.error) if self.error else None,
        }


@dataclass
class Orchestrator:
    env: StepEnv

    @classmethod
    def for_context(cls, ctx: ProjectContext, log: Logger | None = None) -> Orchestrator:
        log = log or ConsoleLogger()
        return cls(
            StepEnv(
                ctx=ctx,
                runner=ProcessRunner(cwd=ctx.project_dir, log=log),
                probe=LocalProbe(ctx.project_dir),
                writer=ConfigWriter(ctx.project_dir),
                log=log,
            )
        )

    def run(self, plan: Plan) -> RunReport:
        log = self.env.log
        report = RunReport(plan=plan.name, steps=[StepRecord(s.name) for s in plan.steps])
        report.state = RunState.RUNNING
        if plan.banner:
            log.info(plan.banner, style="green")

        for step, record in zip(plan.steps, report.steps):
            if step.is_satisfied(self.env.probe):
                record.state = StepState.SKIPPED
                logger.debug(f"{plan.name}/{step.name}: skipped")
                if step.skip_message:
                    log.warn(step.skip_message)
                continue

            record.state = StepState.APPLYING
            logger.debug(f"{plan.name}/{step.name}: applying")
            try:
                step.apply(self.env)
            except BootstrapError as e:
                record.state = StepState.ABORTED
                report.state = RunState.FAILED
                report.error = e
                report.failed_step = step.name
                logger.debug(f"{plan.name}/{step.name}: aborted ({type(e).__name__})")
                log.error(f"Error: {e}")
                return report
            record.state = StepState.DONE
            logger.debug(f"{plan.name}/{step.name}: done")

        report.state = RunState.COMPLETED
        for i, line in enumerate(plan.summary):
            log.info(line, style="green" if i == 0 else None)
        return report
