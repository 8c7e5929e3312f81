"""Pure rendering of TypeScript sources from an API description.

Nothing in this module touches the filesystem or the network. The functions
turn declarations into source text and the ``plan_*`` functions return the
list of files a run would write, which keeps the whole rendering pipeline
testable with fake platform adapters.
"""

import dataclasses
from collections.abc import Iterable, Iterator
from pathlib import Path

from tsgen.definition import Operation, ServiceDeclaration, TypeDeclaration
from tsgen.platform import PlatformConfig

__all__ = [
    'ARRAY_SUFFIX',
    'GENERATED_FILE_COMMENT',
    'NULL_TOKEN',
    'PRIMITIVE_TYPES',
    'REQUEST_PARAMETER',
    'GeneratedFile',
    'collect_custom_types',
    'extract_operation_types',
    'plan_service_files',
    'plan_type_file',
    'render_class',
    'render_method',
    'render_service_file',
    'render_type_file',
    'render_types_import',
    'strip_array_suffix',
]

GENERATED_FILE_COMMENT = '// Attention: This file is generated by tsgen, do not modify'

PRIMITIVE_TYPES = frozenset({'void', 'number', 'string', 'boolean'})

ARRAY_SUFFIX = '[]'

REQUEST_PARAMETER = 'request'

NULL_TOKEN = 'null'

SERVICE_FILE_SUFFIX = '.ts'


@dataclasses.dataclass(frozen=True)
class GeneratedFile:
    """A planned write of ``content`` to ``path``."""

    path: Path
    content: str


def render_type_file(types: Iterable[TypeDeclaration]) -> str:
    """Render the shared type file: the warning line, then one export per type."""
    lines = [GENERATED_FILE_COMMENT]
    lines.extend(
        f'export {declaration.declaration_kind} {declaration.name} {declaration.body}'
        for declaration in types
    )
    return '\n'.join(lines) + '\n'


def strip_array_suffix(type_name: str) -> str:
    """``User[]`` and ``User[][]`` both resolve to ``User``."""
    while type_name.endswith(ARRAY_SUFFIX):
        type_name = type_name[: -len(ARRAY_SUFFIX)]
    return type_name


def extract_operation_types(operation: Operation) -> Iterator[str]:
    """Yield every type name an operation references, array markers stripped.

    Order: path parameter types, then the request type (if any), then the
    response type.
    """
    candidates = [param.type for param in operation.path_params]
    candidates.append(operation.request_type)
    candidates.append(operation.response_type)

    for type_name in candidates:
        if type_name:
            yield strip_array_suffix(type_name)


def collect_custom_types(operations: Iterable[Operation]) -> list[str]:
    """Return the non-primitive type names used by ``operations``.

    The result is deduplicated and keeps first-seen order. Names are compared
    exactly; references to types that do not exist are kept as they are.
    """
    seen: dict[str, None] = {}
    for operation in operations:
        for type_name in extract_operation_types(operation):
            if type_name not in PRIMITIVE_TYPES:
                seen.setdefault(type_name, None)
    return list(seen)


def render_types_import(custom_types: list[str], type_file_import_path: str) -> str:
    if not custom_types:
        return ''
    return f'import type {{ {", ".join(custom_types)} }} from "{type_file_import_path}";'


def render_method(operation: Operation, platform: PlatformConfig) -> str:
    """Render one operation as a static method of the service class."""
    parameters = [f'{param.name}: {param.type}' for param in operation.path_params]
    if operation.request_type:
        parameters.append(f'{REQUEST_PARAMETER}: {operation.request_type}')

    call = platform.render_call(
        operation.http_method,
        operation.path,
        ','.join(param.name for param in operation.path_params),
        REQUEST_PARAMETER if operation.request_type else NULL_TOKEN,
    )

    return (
        f'  static {operation.name}({", ".join(parameters)}): '
        f'Promise<{operation.response_type}> {{\n'
        f'    return {call}\n'
        f'  }}'
    )


def render_class(service: ServiceDeclaration, platform: PlatformConfig) -> str:
    methods = '\n\n'.join(render_method(op, platform) for op in service.operations)
    if not methods:
        return f'export class {service.name} {{}}'
    return f'export class {service.name} {{\n{methods}\n}}'


def render_service_file(service: ServiceDeclaration, platform: PlatformConfig) -> str:
    """Render a complete service file.

    Layout, one part per line: the custom type import (an empty line when the
    service only uses primitives), the adapter's import statement, the warning
    comment, and the class.
    """
    custom_types = collect_custom_types(service.operations)
    parts = [
        render_types_import(custom_types, platform.type_file_import_path),
        platform.ajax_function_import_statement,
        GENERATED_FILE_COMMENT,
        render_class(service, platform),
    ]
    return '\n'.join(parts) + '\n'


def plan_type_file(
    types: list[TypeDeclaration], type_file_path: str | Path
) -> GeneratedFile | None:
    """Plan the shared type file, or None when there are no types."""
    if not types:
        return None
    return GeneratedFile(Path(type_file_path), render_type_file(types))


def plan_service_files(
    services: list[ServiceDeclaration],
    service_folder_path: str | Path,
    platform: PlatformConfig,
) -> list[GeneratedFile]:
    """Plan one ``<ServiceName>.ts`` file per service, in service order."""
    folder = Path(service_folder_path)
    return [
        GeneratedFile(
            folder / f'{service.name}{SERVICE_FILE_SUFFIX}',
            render_service_file(service, platform),
        )
        for service in services
    ]
