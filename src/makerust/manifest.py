"""Binary name lookup from Cargo.toml."""

import re
from pathlib import Path

MANIFEST_NAME = "Cargo.toml"

_NAME_RE = re.compile(r'^name\s*=\s*"([^"]+)"')


def get_binary_name(project_dir: Path) -> str:
    """Return the first ``name = "..."`` value in the project manifest.

    Raises FileNotFoundError if the manifest is missing and ValueError if it
    has no name line.
    """
    manifest = project_dir / MANIFEST_NAME
    if not manifest.is_file():
        raise FileNotFoundError(f"{MANIFEST_NAME} not found in {project_dir}")

    for line in manifest.read_text(errors="replace").splitlines():
        match = _NAME_RE.match(line)
        if match:
            return match.group(1)
    raise ValueError(f"No package name found in {manifest}")
