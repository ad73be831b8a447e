# Copyright 2026. Command-line entry point: build, install and document a cargo project.

import argparse
import sys

from makerust.core.config import (
    BACKTRACE_LEVELS, build_config, load_settings, resolve_project_dir,
    validate_backtrace, validate_build_mode,
)
from makerust.engine.driver import PipelineDriver
from makerust.engine.executor import ActionExecutor, export_backtrace
from makerust.engine.gate import ConfirmationGate
from makerust.engine.policy import ErrorPolicy
from makerust.manifest import get_binary_name
from makerust.output import OutputChannel
from makerust.steps import plan_actions

PROG = "makerust"


class _UsageParser(argparse.ArgumentParser):
    """Unknown or abbreviated flags and missing option values print usage and exit 0."""

    def error(self, message):
        self.print_help()
        sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog=PROG,
        description="Update, build, install and document a Rust project.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose mode.")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="Enable debug mode (increased verbosity).")
    parser.add_argument("-t", "--time", action="store_true",
                        help="Measure and report the execution time of each command.")
    parser.add_argument("-b", "--backtrace", default="full", metavar="VALUE",
                        help=f"Set RUST_BACKTRACE (default: full). "
                             f"Supported values: {', '.join(BACKTRACE_LEVELS)}.")
    parser.add_argument("-p", "--project", metavar="PATH",
                        help="Project directory (default: current directory).")
    parser.add_argument("-w", "--windows-out", metavar="PATH",
                        help="Output directory for the Windows executable.")
    parser.add_argument("-l", "--linux-out", metavar="PATH",
                        help="Output directory for the Linux executable.")
    parser.add_argument("-o", "--doc-out", metavar="PATH",
                        help="Output directory for documentation.")
    parser.add_argument("-m", "--mode", default="release", metavar="MODE",
                        help="Build mode: debug or release (default: release).")
    parser.add_argument("-f", "--force", action="store_true",
                        help="Force mode: skip prompts, abort on the first error.")
    parser.add_argument("-h", "--help", action="store_true", help="Show this help message.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help()
        return 0

    out = OutputChannel(PROG, debug=args.debug)
    try:
        validate_build_mode(args.mode)
        validate_backtrace(args.backtrace)
        project_dir = resolve_project_dir(args.project)
        settings = load_settings(project_dir)
        config = build_config(args, settings, project_dir)
        binary_name = get_binary_name(config.project_dir)
    except (ValueError, FileNotFoundError) as e:
        out.error(str(e))
        return 1

    out = OutputChannel(PROG, debug=config.debug, activity_log=config.activity_log)
    export_backtrace(config.backtrace)
    out.info(f"RUST_BACKTRACE set to {config.backtrace}")
    out.info(f"Detected binary name: {binary_name}")
    out.debug(f"project: {config.project_dir} | mode: {config.build_mode} | "
              f"timing: {config.timing_mode if config.timing else 'off'}")

    actions = plan_actions(config, binary_name)
    driver = PipelineDriver(
        out,
        gate=ConfirmationGate(out),
        executor=ActionExecutor(out),
        policy=ErrorPolicy(out),
    )
    try:
        report = driver.run(actions, config)
    except KeyboardInterrupt:
        out.error("Interrupted.")
        return 130
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
