"""Custom exceptions for tsgen.

This module defines the exceptions raised while fetching an API description
and generating TypeScript sources from it. Transport errors from httpx and
filesystem errors (including the built-in ``NotADirectoryError``) are not
wrapped; they propagate unchanged.
"""

from typing import Any


class TsGenError(Exception):
    """Base exception for all tsgen errors.

    Example:
        try:
            codegen.run()
        except TsGenError as e:
            print(f"tsgen error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class DefinitionError(TsGenError):
    """Base exception for problems with the fetched API description.

    Attributes:
        url: The metadata endpoint the description was fetched from.
    """

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class ContentTypeError(DefinitionError):
    """The metadata endpoint did not declare a JSON payload.

    Attributes:
        url: The metadata endpoint.
        content_type: The observed ``content-type`` header, or None if absent.
    """

    def __init__(self, url: str, content_type: str | None):
        self.content_type = content_type
        super().__init__(f'Unexpected contentType: {content_type} ({url})', url)


class MalformedResponseError(DefinitionError):
    """The payload was JSON but not a valid API description.

    Attributes:
        url: The metadata endpoint.
        body: The raw decoded body, kept for diagnosis.
        errors: Validation messages explaining what was wrong.
    """

    def __init__(self, url: str, body: Any, errors: list[str] | None = None):
        self.body = body
        self.errors = errors or []
        message = f'Unexpected response from {url}: {body!r}'
        if errors:
            message += f' ({"; ".join(errors)})'
        super().__init__(message, url)


class ConfigurationError(TsGenError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)
