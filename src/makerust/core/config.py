# Copyright 2026. Pipeline configuration: parsed options plus the optional project file.

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema

from makerust.engine.model import TaintRules, DEFAULT_SIGNATURE, DEFAULT_SUPPRESSION

CONFIG_FILENAME = ".makerust.json"
CONFIG_ENV_VAR = "MAKERUST_CONFIG"

BUILD_MODES = ("release", "debug")
BACKTRACE_LEVELS = ("full", "short", "0", "1")
TIMING_MODES = ("measure", "rerun")

WINDOWS_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")

SETTINGS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "timing_mode": {"enum": list(TIMING_MODES)},
        "activity_log": {"type": "string", "minLength": 1},
        "native_toolchain": {"type": "string", "minLength": 1},
        "cross_toolchain": {"type": "string", "minLength": 1},
        "toolchain_updater": {"type": "string", "minLength": 1},
        "path_bridge": {"type": "string", "minLength": 1},
        "taint_patterns": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "signature": {"type": "string", "minLength": 1},
                "suppression": {"type": "string", "minLength": 1},
            },
        },
    },
}


@dataclass(frozen=True)
class Settings:
    """Values read from the project configuration file."""

    timing_mode: str = "measure"
    activity_log: str = ""
    native_toolchain: str = "cargo"
    cross_toolchain: str = "cargo.exe"
    toolchain_updater: str = "rustup"
    path_bridge: str = "wslpath"
    taint_rules: TaintRules = field(default_factory=TaintRules)


@dataclass(frozen=True)
class PipelineConfig:
    force: bool = False
    verbose: bool = False
    debug: bool = False
    timing: bool = False
    timing_mode: str = "measure"
    backtrace: str = "full"
    build_mode: str = "release"
    project_dir: Path = field(default_factory=Path.cwd)
    native_out: Path | None = None
    cross_out: Path | None = None
    doc_out: Path | None = None
    activity_log: str = ""
    native_toolchain: str = "cargo"
    cross_toolchain: str = "cargo.exe"
    toolchain_updater: str = "rustup"
    path_bridge: str = "wslpath"
    taint_rules: TaintRules = field(default_factory=TaintRules)

    @property
    def streams_output(self) -> bool:
        return self.verbose or self.debug


def validate_build_mode(mode: str) -> str:
    if mode not in BUILD_MODES:
        raise ValueError(f"Invalid build mode: {mode}. Must be 'release' or 'debug'.")
    return mode


def validate_backtrace(level: str) -> str:
    if level not in BACKTRACE_LEVELS:
        raise ValueError(
            f"Invalid RUST_BACKTRACE value: {level}. "
            f"Supported values: {', '.join(BACKTRACE_LEVELS)}."
        )
    return level


def settings_path(project_dir: Path) -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return project_dir / CONFIG_FILENAME


def load_settings(project_dir: Path) -> Settings:
    """Load the project configuration file, or defaults when there is none.

    The file named by MAKERUST_CONFIG must exist; the default
    ``.makerust.json`` is optional. Raises ValueError on unreadable JSON,
    schema violations or uncompilable patterns.
    """
    path = settings_path(project_dir)
    if not path.is_file():
        if os.environ.get(CONFIG_ENV_VAR):
            raise FileNotFoundError(f"Config file not found: {path}")
        return Settings()

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from None

    try:
        jsonschema.validate(instance=data, schema=SETTINGS_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ValueError(f"Invalid config {path}: {e.message}") from None

    patterns = data.get("taint_patterns", {})
    taint_rules = TaintRules.from_patterns(
        signature=patterns.get("signature", DEFAULT_SIGNATURE),
        suppression=patterns.get("suppression", DEFAULT_SUPPRESSION),
    )

    activity_log = data.get("activity_log", "")
    if activity_log:
        log_path = Path(activity_log).expanduser()
        if not log_path.is_absolute():
            log_path = project_dir / log_path
        activity_log = str(log_path)

    return Settings(
        timing_mode=data.get("timing_mode", "measure"),
        activity_log=activity_log,
        native_toolchain=data.get("native_toolchain", "cargo"),
        cross_toolchain=data.get("cross_toolchain", "cargo.exe"),
        toolchain_updater=data.get("toolchain_updater", "rustup"),
        path_bridge=data.get("path_bridge", "wslpath"),
        taint_rules=taint_rules,
    )


def resolve_project_dir(project: str | None) -> Path:
    if not project:
        return Path.cwd()
    path = Path(project).expanduser().resolve()
    if not path.is_dir():
        raise FileNotFoundError(f"Project directory not found: {path}")
    return path


def output_dir(value: str | None) -> Path | None:
    """Absolute form of an output directory option.

    Windows drive paths (``C:/out``) are kept as given for the path bridge.
    """
    if not value:
        return None
    if WINDOWS_DRIVE_RE.match(value):
        return Path(value)
    return Path(value).expanduser().resolve()


def build_config(args, settings: Settings, project_dir: Path | None = None) -> PipelineConfig:
    """Combine parsed CLI arguments with file settings into the run config."""
    if project_dir is None:
        project_dir = resolve_project_dir(args.project)
    return PipelineConfig(
        force=args.force,
        verbose=args.verbose,
        debug=args.debug,
        timing=args.time,
        timing_mode=settings.timing_mode,
        backtrace=validate_backtrace(args.backtrace),
        build_mode=validate_build_mode(args.mode),
        project_dir=project_dir,
        native_out=output_dir(args.linux_out),
        cross_out=output_dir(args.windows_out),
        doc_out=output_dir(args.doc_out),
        activity_log=settings.activity_log,
        native_toolchain=settings.native_toolchain,
        cross_toolchain=settings.cross_toolchain,
        toolchain_updater=settings.toolchain_updater,
        path_bridge=settings.path_bridge,
        taint_rules=settings.taint_rules,
    )
