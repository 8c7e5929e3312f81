"""Fetching the API description from the metadata endpoint.

The metadata endpoint is usually an internal host with a self-signed
certificate, so TLS verification is disabled unless configured otherwise.
There is exactly one attempt per run; transport errors propagate unchanged.
"""

import logging

import httpx
from pydantic import ValidationError

from tsgen.definition import APIDescription
from tsgen.exceptions import ContentTypeError, MalformedResponseError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = 'application/json'

REQUIRED_FIELDS = ('services', 'types')


class DefinitionFetcher:
    """Fetches and validates an APIDescription over HTTP(S).

    Example:
        >>> fetcher = DefinitionFetcher()
        >>> api = await fetcher.fetch('https://backend.internal/api/metadata')
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        verify_ssl: bool = False,
        timeout: float = 30.0,
    ):
        """Initialize the fetcher.

        Args:
            http_client: Optional client to use for the request. If not
                provided, a client is created for each fetch.
            verify_ssl: Whether to verify the endpoint's TLS certificate.
            timeout: Request timeout in seconds.
        """
        self._http_client = http_client
        self._verify_ssl = verify_ssl
        self._timeout = timeout

    async def fetch(self, url: str) -> APIDescription:
        """Fetch the API description served at ``url``.

        Raises:
            ContentTypeError: If the response is not declared as JSON.
            MalformedResponseError: If the body is not a valid API description.
            httpx.HTTPError: On transport failures and non-2xx responses.
        """
        logger.info(f'Fetching API meta data {url}')

        if self._http_client is not None:
            response = await self._http_client.get(url)
        else:
            async with httpx.AsyncClient(
                verify=self._verify_ssl, timeout=self._timeout
            ) as client:
                response = await client.get(url)

        response.raise_for_status()
        return self.parse(url, response)

    def parse(self, url: str, response: httpx.Response) -> APIDescription:
        """Validate a metadata response and build the APIDescription."""
        content_type = response.headers.get('content-type')
        if not content_type or not content_type.startswith(JSON_CONTENT_TYPE):
            raise ContentTypeError(url, content_type)

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(url, response.text, errors=[str(e)]) from e

        if not isinstance(body, dict):
            raise MalformedResponseError(url, body)

        missing = [name for name in REQUIRED_FIELDS if body.get(name) is None]
        if missing:
            raise MalformedResponseError(
                url, body, errors=[f'missing {name}' for name in missing]
            )

        try:
            return APIDescription.model_validate(body)
        except ValidationError as e:
            errors = [
                f'{".".join(str(loc) for loc in error["loc"])}: {error["msg"]}'
                for error in e.errors()
            ]
            raise MalformedResponseError(url, body, errors=errors) from e
