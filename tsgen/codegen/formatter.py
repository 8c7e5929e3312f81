"""External source formatter invoked after files are emitted.

Formatting is best effort: a missing executable or a non-zero exit status is
logged and never turns a successful generation into a failure.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

FORMATTED_EXTENSIONS = ('css', 'html', 'js', 'json', 'jsx', 'less', 'ts', 'tsx')


def folder_glob(folder: str | Path) -> str:
    """Glob matching every formattable source file below ``folder``."""
    return f'{Path(folder).as_posix()}/**/*.{{{",".join(FORMATTED_EXTENSIONS)}}}'


class Formatter(Protocol):
    async def format(self, target: str) -> None: ...


class NullFormatter:
    """Formatter used when formatting is disabled."""

    async def format(self, target: str) -> None:
        return None


class PrettierFormatter:
    """Runs ``prettier --write <target>`` (or another configured command)."""

    def __init__(self, command: list[str] | None = None):
        self.command = list(command) if command else ['prettier', '--write']

    async def format(self, target: str) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                target,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            logger.warning(f'Formatter not found: {self.command[0]}, skipping {target}')
            return

        _, stderr = await process.communicate()
        if process.returncode != 0:
            logger.warning(
                f'Formatter exited with status {process.returncode} for {target}: '
                f'{stderr.decode(errors="replace").strip()}'
            )
