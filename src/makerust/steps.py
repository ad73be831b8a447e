"""Build plan: the ordered cargo/rustup actions for one run."""

from pathlib import Path

from makerust.core.config import PipelineConfig
from makerust.engine.model import Action
from makerust.paths import PathBridge


def _native_actions(config: PipelineConfig, binary_name: str) -> list[Action]:
    out = config.native_out
    mode = config.build_mode
    build_dir = out / mode
    binary = build_dir / binary_name
    return [
        Action(
            description="Build Linux binary",
            executable=config.native_toolchain,
            args=("build", "--target-dir", str(out), f"--{mode}"),
            cwd=config.project_dir,
        ),
        Action(
            description="Install Linux binary",
            executable="cp",
            args=(str(binary), f"{out}/"),
            cwd=config.project_dir,
            requires=binary,
        ),
        Action(
            description="Remove Linux build directory",
            executable="rm",
            args=("-rf", str(build_dir)),
            cwd=config.project_dir,
            requires=binary,
        ),
    ]


def _cross_actions(config: PipelineConfig, binary_name: str,
                   bridge: PathBridge) -> list[Action]:
    mode = config.build_mode
    host_out = bridge.to_host(str(config.cross_out))
    guest_out = Path(bridge.to_guest(host_out))
    binary = Path(bridge.to_guest(f"{host_out}/{mode}/{binary_name}.exe"))
    return [
        Action(
            description="Build Windows binary",
            executable=config.cross_toolchain,
            args=("build", "--target-dir", host_out, f"--{mode}"),
            cwd=config.project_dir,
        ),
        Action(
            description="Install Windows binary",
            executable="cp",
            args=(str(binary), f"{guest_out}/"),
            cwd=config.project_dir,
            requires=binary,
        ),
        Action(
            description="Remove Windows build directory",
            executable="rm",
            args=("-rf", str(guest_out / mode)),
            cwd=config.project_dir,
            requires=binary,
        ),
    ]


def plan_actions(config: PipelineConfig, binary_name: str,
                 bridge: PathBridge | None = None) -> list[Action]:
    """Return the actions for this run in execution order.

    Platform and documentation steps are left out entirely when their output
    path was not given.
    """
    cwd = config.project_dir
    cargo = config.native_toolchain
    actions = [
        Action("Update Rust toolchain", config.toolchain_updater, ("update",), cwd),
        Action("Update dependencies", cargo, ("update", "-v"), cwd),
        Action("Clean build artifacts", cargo, ("clean",), cwd),
    ]

    if config.native_out is not None:
        actions.extend(_native_actions(config, binary_name))

    if config.cross_out is not None:
        actions.extend(_cross_actions(config, binary_name, bridge or PathBridge(config.path_bridge)))

    if config.doc_out is not None:
        actions.append(Action(
            "Generate documentation", cargo,
            ("doc", "-v", "--target-dir", str(config.doc_out)), cwd,
        ))

    return actions
