"""Models for the API description served by the metadata endpoint.

The wire format uses camelCase keys (``pathParams``, ``requestType``) and the
generic names ``type``/``definition``/``method``. The models expose snake_case
attributes and accept both spellings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    'APIDescription',
    'Operation',
    'Parameter',
    'ServiceDeclaration',
    'TypeDeclaration',
]


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class TypeDeclaration(_WireModel):
    """One shared type, emitted as ``export <kind> <name> <body>``."""

    declaration_kind: str = Field(..., alias='type')
    name: str
    body: str = Field(..., alias='definition')


class Parameter(_WireModel):
    name: str
    type: str


class Operation(_WireModel):
    """One callable endpoint of a service."""

    name: str
    http_method: str = Field(..., alias='method')
    path: str
    path_params: list[Parameter] = Field(default_factory=list, alias='pathParams')
    request_type: str | None = Field(None, alias='requestType')
    response_type: str = Field(..., alias='responseType')

    @field_validator('request_type')
    @classmethod
    def _blank_request_type(cls, value: str | None) -> str | None:
        return value or None


class ServiceDeclaration(_WireModel):
    """A service; its name is both the generated class name and file stem."""

    name: str
    operations: list[Operation] = Field(default_factory=list)


class APIDescription(_WireModel):
    """Root document: every shared type and every service.

    Both lists are required (they may be empty). Type references inside
    operations are plain strings and are not checked against ``types``.
    """

    types: list[TypeDeclaration]
    services: list[ServiceDeclaration]
