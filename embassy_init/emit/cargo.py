"""Cargo-backed PackageManager."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from embassy_init.interfaces.package_manager import PackageManager

logger = logging.getLogger(__name__)


class CargoError(RuntimeError):
    """A cargo invocation could not be started or exited non-zero."""

    def __init__(self, cmd: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(f"`{' '.join(self.cmd)}` failed ({returncode}): {detail}")


class CargoPackageManager(PackageManager):
    """Runs `cargo new` and `cargo add` as subprocesses.

    One call per invocation, no retries.
    """

    def __init__(self, binary: str = "cargo", timeout: Optional[float] = None):
        self.binary = binary
        self.timeout = timeout

    def new_project(self, name: str, parent: Path) -> Path:
        logger.info("Create cargo project")
        self._run([self.binary, "new", name], cwd=parent)
        return parent / name

    def add(
        self,
        project_dir: Path,
        crate: str,
        features: Sequence[str] = (),
        optional: bool = False,
    ) -> None:
        logger.info(f"Cargo add: {crate}")
        self._run(self.add_command(crate, features, optional), cwd=project_dir)

    def add_command(
        self, crate: str, features: Sequence[str] = (), optional: bool = False
    ) -> list[str]:
        cmd = [self.binary, "add", crate]
        if features:
            cmd.append(f"--features={','.join(features)}")
        if optional:
            cmd.append("--optional")
        return cmd

    def _run(self, cmd: list[str], cwd: Path) -> None:
        logger.debug(f"Running {cmd} in {cwd}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise CargoError(cmd, None, str(exc)) from exc

        if result.returncode != 0:
            raise CargoError(cmd, result.returncode, result.stderr)
