"""Shared fakes and builders for engine tests."""

import io
from pathlib import Path

from makerust.core.config import PipelineConfig
from makerust.engine.model import Action, ExecutionResult
from makerust.output import OutputChannel


def make_out(debug: bool = False) -> OutputChannel:
    """An uncolored OutputChannel writing to in-memory streams."""
    return OutputChannel("makerust", debug=debug, stream=io.StringIO(),
                         err_stream=io.StringIO(), color=False)


def out_text(out: OutputChannel) -> str:
    return out.stream.getvalue()


def err_text(out: OutputChannel) -> str:
    return out.err_stream.getvalue()


def make_config(**overrides) -> PipelineConfig:
    overrides.setdefault("project_dir", Path("/proj"))
    return PipelineConfig(**overrides)


def make_action(description: str = "Build", executable: str = "cargo",
                args: tuple[str, ...] = ("build",), requires: Path | None = None) -> Action:
    return Action(description, executable, args, Path("/proj"), requires)


def make_result(exit_code: int = 0, output: str = "", action: Action | None = None,
                streamed: bool = False) -> ExecutionResult:
    return ExecutionResult(action=action or make_action(), exit_code=exit_code,
                           output=output, streamed=streamed)


class FakeRunner:
    """Process runner double: scripted (exit_code, output) per command.

    Keys are either "executable subcommand" or a bare executable name.
    """

    def __init__(self, results: dict[str, tuple[int, str]] | None = None,
                 default: tuple[int, str] = (0, "")):
        self.results = results or {}
        self.default = default
        self.calls: list[list[str]] = []

    def __call__(self, argv, cwd, on_output=None):
        self.calls.append(list(argv))
        key = " ".join(argv[:2])
        code, output = self.results.get(key, self.results.get(argv[0], self.default))
        if on_output is not None:
            for line in output.splitlines(keepends=True):
                on_output(line)
        return code, output

    def executables(self) -> list[str]:
        return [argv[0] for argv in self.calls]


class ScriptedInput:
    """input() double returning queued responses; EOFError when exhausted."""

    def __init__(self, *responses: str):
        self.responses = list(responses)
        self.prompts: list[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise EOFError
        return self.responses.pop(0)


def no_input(prompt: str = "") -> str:
    raise AssertionError(f"unexpected prompt: {prompt!r}")
