"""Package installers invoked as OS subprocesses."""

from __future__ import annotations

import logging
import platform
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from models import InstallError, UnsupportedPlatformError

__all__ = [
    "CmdResult",
    "Installer",
    "PowerShellInstaller",
    "DryRunInstaller",
    "appx_install_argv",
    "get_installer",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: List[str]
    returncode: int
    output: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _ps_literal(value: str) -> str:
    # PowerShell single-quoted strings only treat a doubled quote specially.
    return "'" + value.replace("'", "''") + "'"


def appx_install_argv(path: Path) -> List[str]:
    """Build the PowerShell command line that installs one package file."""
    return [
        "powershell",
        "-NoProfile",
        "-Command",
        f"Add-AppxPackage -Path {_ps_literal(str(path))}",
    ]


class Installer(Protocol):
    """Something that installs a downloaded package file or raises InstallError."""

    def install(self, path: Path) -> None:
        ...


class PowerShellInstaller:
    """Install ``.appx``/``.msixbundle`` files with ``Add-AppxPackage``."""

    def run(self, argv: Sequence[str]) -> CmdResult:
        argv_list = list(argv)
        logger.info("CMD %s", _fmt_argv(argv_list))
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        if p.stdout:
            logger.debug("OUTPUT %s", p.stdout.strip())
        return CmdResult(argv=argv_list, returncode=p.returncode, output=p.stdout or "")

    def install(self, path: Path) -> None:
        try:
            result = self.run(appx_install_argv(path))
        except OSError as exc:
            raise InstallError(
                f"Could not start installer for {path}: {exc}",
                returncode=-1,
                output=str(exc),
            ) from exc
        if result.returncode != 0:
            raise InstallError(
                f"Install of {path} failed ({result.returncode}):\n{result.output}",
                returncode=result.returncode,
                output=result.output,
            )


@dataclass
class DryRunInstaller:
    """Log the install command instead of running it."""

    installed: List[Path] = field(default_factory=list)

    def install(self, path: Path) -> None:
        logger.info("DRY-RUN %s", _fmt_argv(appx_install_argv(path)))
        self.installed.append(path)


def get_installer(system: Optional[str] = None, *, dry_run: bool = False) -> Installer:
    """Pick the installer for the host OS."""
    if dry_run:
        return DryRunInstaller()
    name = platform.system() if system is None else system
    if name == "Windows":
        return PowerShellInstaller()
    raise UnsupportedPlatformError(
        f"Installing app packages requires Windows (running on {name or 'unknown'}); "
        "use --dry-run to only download"
    )
