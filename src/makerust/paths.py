"""Host/guest path translation through wslpath."""

import subprocess


class PathBridge:
    """Translate between WSL (guest) and Windows (host) paths.

    Falls back to the untranslated path when the bridge tool cannot be run or
    rejects the input, so non-WSL hosts still get a usable plan.
    """

    def __init__(self, tool: str = "wslpath"):
        self.tool = tool

    def _convert(self, flags: list[str], path: str) -> str:
        try:
            result = subprocess.run(
                [self.tool, *flags, path],
                capture_output=True, text=True, check=True,
            )
        except (subprocess.CalledProcessError, OSError):
            return path
        return result.stdout.strip() or path

    def to_host(self, path: str) -> str:
        """Absolute Windows path with forward slashes (``C:/...``)."""
        return self._convert(["-m", "-a"], path)

    def to_guest(self, path: str) -> str:
        return self._convert(["-u"], path)
