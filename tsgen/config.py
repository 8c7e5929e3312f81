import json
import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tsgen.platform import PlatformConfig, load_platform

DEFAULT_FILENAMES = ['tsgen.yaml', 'tsgen.yml']

_ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}')

DEFAULT_CONFIG_TEMPLATE = """\
# tsgen configuration
# ${VAR} and ${VAR:-default} are expanded from the environment.

metadata_endpoint_url: "https://localhost:8443/api/metadata"
type_file_path: "./src/api/types.ts"
service_folder_path: "./src/api/services"

platform:
  # Built-in adapter name or "package.module:factory"
  adapter: ajax
  options:
    type_file_import_path: "@/api/types"
    ajax_module: "@/utils/ajax"

formatter:
  enabled: true
  command: ["prettier", "--write"]
"""


class PlatformSettings(BaseModel):
    """Which platform adapter renders the request calls."""

    adapter: str = Field(
        ..., description='Built-in adapter name or "package.module:factory".'
    )
    options: dict[str, Any] = Field(
        default_factory=dict, description='Keyword arguments for the adapter factory.'
    )


class FormatterSettings(BaseModel):
    enabled: bool = Field(True, description='Whether to format emitted files.')
    command: list[str] = Field(
        default_factory=lambda: ['prettier', '--write'],
        description='Formatter command; the target path is appended.',
    )


class GeneratorConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='TSGEN_', env_nested_delimiter='__')

    metadata_endpoint_url: str = Field(
        ..., description='URL serving the API description document.'
    )
    type_file_path: str = Field(..., description='Output path of the shared type file.')
    service_folder_path: str = Field(
        ..., description='Output directory for service files; replaced on every run.'
    )
    platform: PlatformSettings
    formatter: FormatterSettings = Field(default_factory=FormatterSettings)
    verify_ssl: bool = Field(
        False, description='Verify the TLS certificate of the metadata endpoint.'
    )
    timeout: float = Field(30.0, description='Fetch timeout in seconds.')

    def build_platform(self) -> PlatformConfig:
        return load_platform(self.platform.adapter, **self.platform.options)


def _expand_env_vars(value: str) -> str:
    """Expand ``${VAR}`` and ``${VAR:-default}`` references in a string."""

    def replace(match: re.Match) -> str:
        name, default = match.group(1), match.group(2)
        return os.environ.get(name, default if default is not None else match.group(0))

    return _ENV_VAR_PATTERN.sub(replace, value)


def _expand_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return _expand_env_vars(data)
    if isinstance(data, dict):
        return {k: _expand_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars_recursive(item) for item in data]
    return data


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text(encoding='utf-8')) or {}


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text(encoding='utf-8'))


def _load_file(path: str | Path) -> dict:
    if Path(path).suffix.lower() == '.json':
        return load_json(path)
    return load_yaml(path)


def _validate(data: dict) -> GeneratorConfig:
    # init kwargs so TSGEN_* environment variables fill in missing fields
    return GeneratorConfig(**_expand_env_vars_recursive(data))


def get_config(path: str | None = None) -> GeneratorConfig:
    """Load configuration from a file, tsgen.yaml, or pyproject.toml."""
    if path:
        return _validate(_load_file(path))

    cwd = Path(os.getcwd())

    for filename in DEFAULT_FILENAMES:
        candidate = cwd / filename
        if candidate.exists():
            return _validate(load_yaml(candidate))

    pyproject_path = cwd / 'pyproject.toml'

    if pyproject_path.exists():
        import tomllib

        pyproject = tomllib.loads(pyproject_path.read_text(encoding='utf-8'))
        tools = pyproject.get('tool', {})

        if 'tsgen' in tools:
            return _validate(tools['tsgen'])

    raise FileNotFoundError('config not found')


def create_default_config(path: str | Path = DEFAULT_FILENAMES[0]) -> Path:
    """Write a starter configuration file.

    Raises:
        FileExistsError: If the file already exists.
    """
    path = Path(path)
    if path.exists():
        raise FileExistsError(f'{path} already exists')
    path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding='utf-8')
    return path
