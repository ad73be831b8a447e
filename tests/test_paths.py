"""Tests for paths — wslpath bridge."""

import subprocess
import unittest
from unittest.mock import patch, MagicMock

from makerust.paths import PathBridge


class TestPathBridge(unittest.TestCase):
    @patch("makerust.paths.subprocess.run")
    def test_to_host_uses_mixed_absolute(self, mock_run):
        mock_run.return_value = MagicMock(stdout="C:/out\n")
        self.assertEqual(PathBridge().to_host("/mnt/c/out"), "C:/out")
        self.assertEqual(mock_run.call_args[0][0], ["wslpath", "-m", "-a", "/mnt/c/out"])

    @patch("makerust.paths.subprocess.run")
    def test_to_guest(self, mock_run):
        mock_run.return_value = MagicMock(stdout="/mnt/c/out\n")
        self.assertEqual(PathBridge().to_guest("C:/out"), "/mnt/c/out")
        self.assertEqual(mock_run.call_args[0][0], ["wslpath", "-u", "C:/out"])

    @patch("makerust.paths.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_tool_returns_input(self, _):
        self.assertEqual(PathBridge().to_host("/out"), "/out")

    @patch("makerust.paths.subprocess.run", side_effect=PermissionError(13, "Permission denied"))
    def test_unrunnable_tool_returns_input(self, _):
        self.assertEqual(PathBridge().to_host("/out"), "/out")

    @patch("makerust.paths.subprocess.run",
           side_effect=subprocess.CalledProcessError(1, ["wslpath"]))
    def test_failure_returns_input(self, _):
        self.assertEqual(PathBridge().to_guest("bogus"), "bogus")

    @patch("makerust.paths.subprocess.run")
    def test_custom_tool(self, mock_run):
        mock_run.return_value = MagicMock(stdout="x\n")
        PathBridge("cygpath").to_guest("C:/x")
        self.assertEqual(mock_run.call_args[0][0][0], "cygpath")


if __name__ == "__main__":
    unittest.main()
