"""Value types shared by the gate, executor, policy and driver."""

import enum
import re
from dataclasses import dataclass, field
from pathlib import Path


class Decision(str, enum.Enum):
    PROCEED = "proceed"
    SKIP = "skip"
    ABORT = "abort"


class Outcome(str, enum.Enum):
    CLEAN = "clean"
    TAINTED = "tainted"
    FAILED = "failed"


class PipelineStatus(str, enum.Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"

    @property
    def exit_code(self) -> int:
        return 0 if self is PipelineStatus.COMPLETED else 1


# Standalone "error"/"warning" words, e.g. cargo's "warning: unused variable".
# Not joined to names or paths such as quick-error or src/error.rs.
DEFAULT_SIGNATURE = r"(?<![\w/.-])(?:error|warning)(?![\w/-]|\.\w)"
# Flag-shaped tokens such as --error, -Werror, --error-format=json.
DEFAULT_SUPPRESSION = r"(?<![\w-])--?[\w-]*(?:error|warning)[\w=.,-]*"


@dataclass(frozen=True)
class TaintRules:
    """Output patterns that mark a zero-exit run as tainted.

    A line is tainted when ``signature`` still matches after every
    ``suppression`` match has been cut out of it.
    """

    signature: re.Pattern = field(
        default_factory=lambda: re.compile(DEFAULT_SIGNATURE, re.IGNORECASE))
    suppression: re.Pattern = field(
        default_factory=lambda: re.compile(DEFAULT_SUPPRESSION, re.IGNORECASE))

    @classmethod
    def from_patterns(cls, signature: str = DEFAULT_SIGNATURE,
                      suppression: str = DEFAULT_SUPPRESSION) -> "TaintRules":
        try:
            return cls(
                signature=re.compile(signature, re.IGNORECASE),
                suppression=re.compile(suppression, re.IGNORECASE),
            )
        except re.error as e:
            raise ValueError(f"Invalid taint pattern: {e}") from None

    def line_is_tainted(self, line: str) -> bool:
        return bool(self.signature.search(self.suppression.sub(" ", line)))


@dataclass(frozen=True)
class Action:
    description: str
    executable: str
    args: tuple[str, ...] = ()
    cwd: Path = field(default_factory=Path.cwd)
    requires: Path | None = None

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def display(self) -> str:
        return " ".join(self.argv)


@dataclass
class ExecutionResult:
    action: Action
    exit_code: int
    output: str = ""
    elapsed: float | None = None
    streamed: bool = False
