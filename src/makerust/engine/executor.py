"""Action execution: run one argv to completion, capture output, time it."""

import os
import subprocess
import time
from pathlib import Path
from typing import Callable, Protocol

from makerust.core.config import PipelineConfig
from makerust.core.logging import format_duration
from makerust.output import OutputChannel
from .model import Action, ExecutionResult

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


class ProcessRunner(Protocol):
    def __call__(self, argv: list[str], cwd: Path,
                 on_output: Callable[[str], None] | None = None) -> tuple[int, str]: ...


def run_process(argv: list[str], cwd: Path,
                on_output: Callable[[str], None] | None = None) -> tuple[int, str]:
    """Run argv with stderr folded into stdout. Returns (exit_code, output).

    When ``on_output`` is given, each line is handed to it as it arrives.
    """
    try:
        if on_output is None:
            result = subprocess.run(
                argv, cwd=str(cwd), stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
            )
            return result.returncode, result.stdout.decode(errors="replace")

        chunks: list[str] = []
        with subprocess.Popen(
            argv, cwd=str(cwd), stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
        ) as proc:
            for raw in proc.stdout:
                line = raw.decode(errors="replace")
                chunks.append(line)
                on_output(line)
            returncode = proc.wait()
        return returncode, "".join(chunks)
    except FileNotFoundError:
        return EXIT_NOT_FOUND, f"{argv[0]}: command not found\n"
    except PermissionError as e:
        return EXIT_NOT_EXECUTABLE, f"{argv[0]}: {e}\n"


class ActionExecutor:
    def __init__(self, out: OutputChannel, runner: ProcessRunner | None = None):
        self.out = out
        self.runner = runner or run_process

    def _run_once(self, action: Action, config: PipelineConfig) -> tuple[int, str, float]:
        on_output = self.out.raw if config.streams_output else None
        self.out.debug(f"exec: {action.argv!r} (cwd={action.cwd})")
        start = time.monotonic()
        exit_code, output = self.runner(action.argv, action.cwd, on_output)
        return exit_code, output, time.monotonic() - start

    def execute(self, action: Action, config: PipelineConfig) -> ExecutionResult:
        exit_code, output, elapsed = self._run_once(action, config)
        self.out.debug(f"exit code {exit_code} after {format_duration(elapsed)}")
        result = ExecutionResult(
            action=action, exit_code=exit_code, output=output,
            streamed=config.streams_output,
        )

        if not config.timing:
            return result

        if config.timing_mode == "rerun":
            # Second execution purely for the timing report; its result is not classified.
            self.out.info(f"Running command with timing: {action.display()}")
            rerun_code, _, elapsed = self._run_once(action, config)
            self.out.debug(f"timed run exit code {rerun_code}")

        result.elapsed = elapsed
        self.out.info(f"Elapsed {format_duration(elapsed)}: {action.description}")
        return result


def export_backtrace(level: str) -> None:
    """Set RUST_BACKTRACE for this process and every action it spawns."""
    os.environ["RUST_BACKTRACE"] = level
