"""Pre-execution confirmation: run, skip or abort each action."""

from typing import Callable

from makerust.core.config import PipelineConfig
from makerust.output import OutputChannel, GREEN
from .model import Action, Decision

AFFIRMATIVE = {"", "y", "yes"}
ABORT_RESPONSES = {"a", "abort"}

PROCEED_PROMPT = "Do you want to proceed? [Y/n/a] "

InputFn = Callable[[str], str]


def read_response(prompt: str, input_fn: InputFn) -> str | None:
    """Read one line of operator input. Returns None when input is closed."""
    try:
        return input_fn(prompt).strip().lower()
    except EOFError:
        return None


def is_affirmative(response: str | None) -> bool:
    return response is not None and response in AFFIRMATIVE


class ConfirmationGate:
    def __init__(self, out: OutputChannel, input_fn: InputFn | None = None):
        self.out = out
        self.input_fn = input_fn or input

    def decide(self, action: Action, config: PipelineConfig) -> Decision:
        if config.force:
            self.out.info(f"Force mode enabled: executing without prompt: {action.display()}")
            return Decision.PROCEED

        self.out.info(f"About to execute: {self.out.paint(action.display(), GREEN)}")
        response = read_response(PROCEED_PROMPT, self.input_fn)

        if response is None:
            self.out.error(f"No input available to confirm: {action.description}")
            return Decision.ABORT
        if response in AFFIRMATIVE:
            self.out.info(f"Proceeding with: {action.description}")
            return Decision.PROCEED
        if response in ABORT_RESPONSES:
            self.out.warn(f"Aborted by user at: {action.description}")
            return Decision.ABORT

        self.out.info(f"Skipping: {action.description}")
        return Decision.SKIP
