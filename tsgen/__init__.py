"""tsgen - Generate TypeScript API clients from a backend's API description.

tsgen fetches a JSON document describing shared types and services from a
metadata endpoint, then writes one file with every shared type and one
client class per service. The request call inside each method is rendered by
a pluggable platform adapter.

Quick Start:
    >>> from tsgen import Codegen, get_config
    >>>
    >>> Codegen(get_config('tsgen.yaml')).run()

CLI Usage:
    $ tsgen init      # Create a starter tsgen.yaml
    $ tsgen generate  # Regenerate the type file and service folder
"""

from tsgen.codegen.codegen import Codegen
from tsgen.config import GeneratorConfig, get_config
from tsgen.definition import (
    APIDescription,
    Operation,
    Parameter,
    ServiceDeclaration,
    TypeDeclaration,
)
from tsgen.exceptions import (
    ConfigurationError,
    ContentTypeError,
    DefinitionError,
    MalformedResponseError,
    TsGenError,
)
from tsgen.platform import PlatformConfig, ajax_platform, load_platform

__all__ = [
    # Main classes
    'Codegen',
    'PlatformConfig',
    'ajax_platform',
    'load_platform',
    # API description
    'APIDescription',
    'Operation',
    'Parameter',
    'ServiceDeclaration',
    'TypeDeclaration',
    # Configuration
    'GeneratorConfig',
    'get_config',
    # Exceptions
    'TsGenError',
    'DefinitionError',
    'ContentTypeError',
    'MalformedResponseError',
    'ConfigurationError',
]

try:
    from importlib.metadata import version as _version

    __version__ = _version('tsgen')
except ImportError:
    __version__ = 'unknown'
