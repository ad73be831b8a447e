"""Post-execution error policy: classify a result and decide what happens next."""

from makerust.core.config import PipelineConfig
from makerust.output import OutputChannel
from .gate import InputFn, read_response, is_affirmative
from .model import Decision, ExecutionResult, Outcome, TaintRules

CONTINUE_PROMPT = "Do you want to continue to the next command? [Y/n] "

MAX_REPORTED_LINES = 40


def classify(result: ExecutionResult, rules: TaintRules) -> Outcome:
    if result.exit_code != 0:
        return Outcome.FAILED
    if any(rules.line_is_tainted(line) for line in result.output.splitlines()):
        return Outcome.TAINTED
    return Outcome.CLEAN


def tainted_lines(output: str, rules: TaintRules) -> list[str]:
    return [line for line in output.splitlines() if rules.line_is_tainted(line)]


class ErrorPolicy:
    def __init__(self, out: OutputChannel, input_fn: InputFn | None = None):
        self.out = out
        self.input_fn = input_fn or input

    def _report(self, result: ExecutionResult, outcome: Outcome,
                config: PipelineConfig) -> None:
        action = result.action
        if outcome is Outcome.FAILED:
            self.out.error(f"Command failed: {action.display()} (exit code: {result.exit_code})")
        else:
            self.out.error(
                f"Command reported errors or warnings: {action.display()} "
                f"(exit code: {result.exit_code})"
            )
            for line in tainted_lines(result.output, config.taint_rules)[:MAX_REPORTED_LINES]:
                self.out.debug(f"matched: {line}")

        if not result.streamed and result.output.strip():
            lines = result.output.rstrip("\n").splitlines()
            if len(lines) > MAX_REPORTED_LINES:
                self.out.warn(f"Showing last {MAX_REPORTED_LINES} of {len(lines)} output lines")
                lines = lines[-MAX_REPORTED_LINES:]
            self.out.raw("\n".join(lines) + "\n")

    def resolve(self, result: ExecutionResult, config: PipelineConfig) -> Decision:
        outcome = classify(result, config.taint_rules)
        self.out.debug(f"outcome: {outcome.value}")
        if outcome is Outcome.CLEAN:
            return Decision.PROCEED

        self._report(result, outcome, config)

        if config.force:
            self.out.error("Force mode enabled: aborting on error.")
            return Decision.ABORT

        response = read_response(CONTINUE_PROMPT, self.input_fn)
        if is_affirmative(response):
            self.out.warn("Continuing to the next command despite error.")
            return Decision.PROCEED
        return Decision.ABORT
