"""Filesystem side of code generation.

The FileEmitter performs the writes planned by :mod:`tsgen.codegen.render`.
Writes run in worker threads so many files can be written concurrently from
one event loop.
"""

import asyncio
import logging
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

from tsgen.codegen.render import GeneratedFile

logger = logging.getLogger(__name__)


class FileEmitter:
    """Writes generated files as UTF-8 text, overwriting existing files.

    There is no rollback: if one write in :meth:`write_all` fails, files
    already written by the other writes stay on disk.

    Example:
        >>> emitter = FileEmitter()
        >>> await emitter.reset_directory('./src/api/services')
        >>> await emitter.write_all(files)
    """

    def __init__(self):
        self._written_files: list[str] = []

    async def reset_directory(self, path: str | Path) -> None:
        """Delete ``path`` recursively if it is a directory, then recreate it.

        Raises:
            NotADirectoryError: If ``path`` exists but is not a directory.
                Nothing is deleted or created in that case.
        """
        await asyncio.to_thread(self._reset_directory, Path(path))

    def check_directory(self, path: str | Path) -> None:
        """Raise NotADirectoryError if ``path`` exists and is not a directory."""
        path = Path(path)
        if path.exists() and not path.is_dir():
            raise NotADirectoryError(20, 'Path is not a directory', str(path))

    def _reset_directory(self, path: Path) -> None:
        self.check_directory(path)
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True, exist_ok=True)

    async def write(self, file: GeneratedFile, create_parents: bool = False) -> str:
        """Write one file and return its path.

        Args:
            file: The planned file.
            create_parents: Create missing parent directories first.
        """
        await asyncio.to_thread(self._write, file, create_parents)
        self._written_files.append(str(file.path))
        logger.debug(f'Wrote {file.path}')
        return str(file.path)

    def _write(self, file: GeneratedFile, create_parents: bool) -> None:
        if create_parents:
            file.path.parent.mkdir(parents=True, exist_ok=True)
        file.path.write_text(file.content, encoding='utf-8')

    async def write_all(
        self,
        files: Iterable[GeneratedFile],
        on_written: Callable[[GeneratedFile], None] | None = None,
    ) -> list[str]:
        """Write all files concurrently.

        Every write is allowed to settle before a failure is reported.

        Args:
            files: The planned files.
            on_written: Called with each file as soon as its write completes.

        Returns:
            The written paths, in the order of ``files``.

        Raises:
            OSError: The first failing write, in the order of ``files``.
                Successful sibling writes are not undone.
        """

        async def write_one(file: GeneratedFile) -> str:
            path = await self.write(file)
            if on_written is not None:
                on_written(file)
            return path

        results = await asyncio.gather(
            *(write_one(file) for file in files), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    def get_written_files(self) -> list[str]:
        """Get list of all files written by this emitter, in completion order."""
        return self._written_files.copy()
