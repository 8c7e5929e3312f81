"""Code generation module for tsgen.

This module provides the main Codegen class that fetches an API description
and generates the shared TypeScript type file and one client class file per
service.
"""

import asyncio
import logging
from pathlib import Path

from tsgen.codegen.emitter import FileEmitter
from tsgen.codegen.fetcher import DefinitionFetcher
from tsgen.codegen.formatter import (
    Formatter,
    NullFormatter,
    PrettierFormatter,
    folder_glob,
)
from tsgen.codegen.render import (
    GeneratedFile,
    plan_service_files,
    plan_type_file,
)
from tsgen.codegen.reporter import LoggingReporter, Reporter
from tsgen.config import GeneratorConfig
from tsgen.definition import APIDescription, ServiceDeclaration, TypeDeclaration
from tsgen.platform import PlatformConfig

logger = logging.getLogger(__name__)


class Codegen:
    """Generates TypeScript API clients from a remote API description.

    A run fetches the description once, then generates the type file and the
    service folder concurrently:

    - the type file is written only when the description declares types
    - the service folder is deleted and recreated, then one file per service
      is written concurrently
    - the formatter runs over each output once its files are written

    The first failure ends the run. Service files that were already written
    when a sibling write failed are left on disk.

    Attributes:
        config: The GeneratorConfig with endpoint and output settings.
        platform: The PlatformConfig used to render request calls.

    Example:
        >>> from tsgen.config import get_config
        >>> from tsgen.codegen.codegen import Codegen
        >>>
        >>> codegen = Codegen(get_config())
        >>> codegen.run()
        # Writes the type file and the service folder, exits 1 on failure
    """

    def __init__(
        self,
        config: GeneratorConfig,
        platform: PlatformConfig | None = None,
        fetcher: DefinitionFetcher | None = None,
        emitter: FileEmitter | None = None,
        formatter: Formatter | None = None,
        reporter: Reporter | None = None,
    ):
        """Initialize the code generator.

        Args:
            config: Endpoint, output path and platform settings.
            platform: Optional adapter overriding ``config.platform``.
            fetcher: Optional custom fetcher. Defaults to a DefinitionFetcher
                honouring ``config.verify_ssl`` and ``config.timeout``.
            emitter: Optional custom emitter.
            formatter: Optional custom formatter. Defaults to prettier, or to
                no formatting when ``config.formatter.enabled`` is false.
            reporter: Receives progress messages and the failure of
                :meth:`run`. Defaults to a LoggingReporter.
        """
        self.config = config
        self.platform = platform or config.build_platform()
        self._fetcher = fetcher or DefinitionFetcher(
            verify_ssl=config.verify_ssl, timeout=config.timeout
        )
        self._emitter = emitter or FileEmitter()
        if formatter is None:
            formatter = (
                PrettierFormatter(config.formatter.command)
                if config.formatter.enabled
                else NullFormatter()
            )
        self._formatter = formatter
        self._reporter = reporter or LoggingReporter()

    def run(self) -> None:
        """Run a complete generation, handing any failure to the reporter."""
        try:
            asyncio.run(self.generate())
        except Exception as e:
            self._reporter.fail(e)

    async def generate(self) -> None:
        """Fetch the API description and generate every output.

        Raises:
            ContentTypeError: If the metadata response is not JSON.
            MalformedResponseError: If the description is invalid.
            NotADirectoryError: If the service folder path is a file.
            httpx.HTTPError: On transport failures.
            OSError: On filesystem failures.
        """
        api = await self.fetch_definition()
        # Fail before any output is written, including the type file.
        if api.services:
            self._emitter.check_directory(self.config.service_folder_path)
        await asyncio.gather(
            self.generate_type_file(api.types, self.config.type_file_path),
            self.generate_service_folder(
                api.services, self.config.service_folder_path, self.platform
            ),
        )

    @property
    def written_files(self) -> list[str]:
        """Paths written so far by this generator, in completion order."""
        return self._emitter.get_written_files()

    async def fetch_definition(self) -> APIDescription:
        return await self._fetcher.fetch(self.config.metadata_endpoint_url)

    def plan(self, api: APIDescription) -> list[GeneratedFile]:
        """Return every file a run would write for ``api``, without writing."""
        files = plan_service_files(
            api.services, self.config.service_folder_path, self.platform
        )
        type_file = plan_type_file(api.types, self.config.type_file_path)
        if type_file is not None:
            files.insert(0, type_file)
        return files

    async def dry_run(self) -> list[GeneratedFile]:
        """Fetch the description and plan the outputs without touching disk."""
        return self.plan(await self.fetch_definition())

    async def generate_type_file(
        self, types: list[TypeDeclaration], file_path: str | Path
    ) -> None:
        """Write the shared type file. Does nothing when there are no types."""
        type_file = plan_type_file(types, file_path)
        if type_file is None:
            return

        self._reporter.info(f'Generating API Type File {file_path}')
        await self._emitter.write(type_file, create_parents=True)
        await self._formatter.format(str(type_file.path))

    async def generate_service_folder(
        self,
        services: list[ServiceDeclaration],
        folder_path: str | Path,
        platform: PlatformConfig,
    ) -> None:
        """Replace ``folder_path`` with one generated file per service.

        Does nothing when there are no services.

        Raises:
            NotADirectoryError: If ``folder_path`` exists and is not a
                directory; nothing is written in that case.
        """
        if not services:
            return

        await self._emitter.reset_directory(folder_path)
        self._reporter.info(f'Generating API Service Files {folder_path}')

        files = plan_service_files(services, folder_path, platform)
        count = 0

        def on_written(file: GeneratedFile) -> None:
            nonlocal count
            count += 1
            self._reporter.info(f'({count}) {file.path.stem} Generated')

        await self._emitter.write_all(files, on_written=on_written)
        await self._formatter.format(folder_glob(folder_path))
