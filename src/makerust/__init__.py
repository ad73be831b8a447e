# Copyright 2026. Build/deploy orchestrator for cargo projects.

__version__ = "0.1.0"
