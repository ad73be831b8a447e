"""Pipeline driver: gate -> executor -> policy for each action, in order."""

import time
from dataclasses import dataclass, field
from typing import Iterable

from makerust.core.config import PipelineConfig
from makerust.core.logging import format_duration
from makerust.output import OutputChannel, GREEN, RED
from .executor import ActionExecutor
from .gate import ConfirmationGate
from .model import Action, Decision, PipelineStatus
from .policy import ErrorPolicy


@dataclass
class RunReport:
    status: PipelineStatus = PipelineStatus.COMPLETED
    executed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    aborted_at: str = ""
    elapsed: float = 0.0

    @property
    def exit_code(self) -> int:
        return self.status.exit_code


class PipelineDriver:
    def __init__(self, out: OutputChannel, gate: ConfirmationGate,
                 executor: ActionExecutor, policy: ErrorPolicy):
        self.out = out
        self.gate = gate
        self.executor = executor
        self.policy = policy

    def _artifact_present(self, action: Action) -> bool:
        if action.requires is None:
            return True
        if not action.requires.is_file():
            self.out.warn(f"Artifact not found: {action.requires} (skipping: {action.description})")
            return False
        self.out.info(f"Artifact found: {action.requires}")
        return True

    def _step(self, action: Action, config: PipelineConfig, report: RunReport) -> Decision:
        decision = self.gate.decide(action, config)
        if decision is not Decision.PROCEED:
            return decision

        result = self.executor.execute(action, config)
        report.executed.append(action.description)
        return self.policy.resolve(result, config)

    def run(self, actions: Iterable[Action], config: PipelineConfig) -> RunReport:
        report = RunReport()
        start = time.monotonic()

        for action in actions:
            self.out.debug(f"step: {action.description}")
            if not self._artifact_present(action):
                report.missing.append(action.description)
                continue
            decision = self._step(action, config, report)
            if decision is Decision.ABORT:
                report.status = PipelineStatus.ABORTED
                report.aborted_at = action.description
                break
            if decision is Decision.SKIP:
                report.skipped.append(action.description)

        report.elapsed = time.monotonic() - start
        duration = format_duration(report.elapsed)
        if report.status is PipelineStatus.COMPLETED:
            self.out.info(self.out.paint(f"Script completed successfully in {duration}.", GREEN))
        else:
            self.out.error(self.out.paint(
                f"Pipeline aborted at '{report.aborted_at}' after {duration}.", RED))
        self.out.debug(
            f"executed={len(report.executed)} skipped={len(report.skipped)} "
            f"missing={len(report.missing)}"
        )
        return report
