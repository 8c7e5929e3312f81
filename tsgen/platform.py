"""Platform adapters.

A platform adapter decides how a generated method actually performs its
request. It is a plain record of two strings and one pure function, shared
by every service of a generation run:

    >>> platform = ajax_platform('@/api/types', '@/utils/ajax')
    >>> platform.render_call('GET', '/user/:id', 'id', 'null')
    'ajax("GET", "/user/:id", [id], null);'

Custom adapters are factories returning a PlatformConfig. They are referenced
from configuration either by built-in name or as ``package.module:factory``.
"""

import dataclasses
import importlib
from collections.abc import Callable
from typing import Any

from tsgen.exceptions import ConfigurationError

__all__ = ['PlatformConfig', 'RenderCall', 'ajax_platform', 'load_platform']

# (http_method, path, params_expr, body_expr) -> call expression
RenderCall = Callable[[str, str, str, str], str]


@dataclasses.dataclass(frozen=True)
class PlatformConfig:
    type_file_import_path: str
    ajax_function_import_statement: str
    render_call: RenderCall


def ajax_platform(
    type_file_import_path: str, ajax_module: str, function_name: str = 'ajax'
) -> PlatformConfig:
    """Build an adapter calling ``function_name(method, path, [params], body)``.

    Args:
        type_file_import_path: Module specifier the service files import
            shared types from.
        ajax_module: Module specifier exporting the request function.
        function_name: Name of the request function exported by ``ajax_module``.

    Returns:
        The adapter.
    """

    def render_call(method: str, path: str, params: str, body: str) -> str:
        return f'{function_name}("{method}", "{path}", [{params}], {body});'

    return PlatformConfig(
        type_file_import_path=type_file_import_path,
        ajax_function_import_statement=f'import {{ {function_name} }} from "{ajax_module}";',
        render_call=render_call,
    )


BUILTIN_PLATFORMS: dict[str, Callable[..., PlatformConfig]] = {
    'ajax': ajax_platform,
}


def _import_factory(reference: str) -> Callable[..., PlatformConfig]:
    module_name, _, attribute = reference.partition(':')
    if not module_name or not attribute:
        raise ConfigurationError(
            f"Invalid adapter reference '{reference}', expected 'package.module:factory'",
            field='platform.adapter',
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import adapter module '{module_name}': {e}",
            field='platform.adapter',
        ) from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(
            f"Module '{module_name}' has no attribute '{attribute}'",
            field='platform.adapter',
        ) from e


def load_platform(adapter: str, **options: Any) -> PlatformConfig:
    """Resolve an adapter reference and build the PlatformConfig.

    Args:
        adapter: A built-in adapter name or a ``package.module:factory`` path.
        **options: Keyword arguments passed to the factory.

    Returns:
        The PlatformConfig produced by the factory.

    Raises:
        ConfigurationError: If the reference cannot be resolved or the
            factory does not produce a PlatformConfig.
    """
    if adapter in BUILTIN_PLATFORMS:
        factory = BUILTIN_PLATFORMS[adapter]
    else:
        factory = _import_factory(adapter)

    try:
        platform = factory(**options)
    except TypeError as e:
        raise ConfigurationError(
            f"Invalid options for adapter '{adapter}': {e}", field='platform.options'
        ) from e

    if not isinstance(platform, PlatformConfig):
        raise ConfigurationError(
            f"Adapter '{adapter}' returned {type(platform).__name__}, not PlatformConfig",
            field='platform.adapter',
        )
    return platform
