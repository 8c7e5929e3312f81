"""Code generation module for tsgen.

Main Components:
    - Codegen: The orchestrator of a generation run
    - DefinitionFetcher: Fetches and validates the API description
    - render: Pure functions turning declarations into TypeScript sources
    - FileEmitter: Writes generated files and resets the service folder
    - PrettierFormatter: Formats emitted files

Example:
    >>> from tsgen.codegen import Codegen
    >>> from tsgen.config import get_config
    >>>
    >>> Codegen(get_config()).run()
"""

from tsgen.codegen.codegen import Codegen
from tsgen.codegen.emitter import FileEmitter
from tsgen.codegen.fetcher import DefinitionFetcher
from tsgen.codegen.formatter import NullFormatter, PrettierFormatter
from tsgen.codegen.render import (
    GeneratedFile,
    collect_custom_types,
    plan_service_files,
    plan_type_file,
    render_service_file,
    render_type_file,
)
from tsgen.codegen.reporter import LoggingReporter, Reporter

__all__ = [
    'Codegen',
    'DefinitionFetcher',
    'FileEmitter',
    'GeneratedFile',
    'LoggingReporter',
    'NullFormatter',
    'PrettierFormatter',
    'Reporter',
    'collect_custom_types',
    'plan_service_files',
    'plan_type_file',
    'render_service_file',
    'render_type_file',
]
