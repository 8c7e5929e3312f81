"""Tests for fetching the API description.

A FastAPI app stands in for the metadata endpoint and is served to the
fetcher through httpx's ASGI transport.
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse, Response

from tsgen.codegen.fetcher import DefinitionFetcher
from tsgen.exceptions import ContentTypeError, MalformedResponseError

from .fixtures import USER_API

BASE_URL = 'https://metadata.internal'

app = FastAPI(title='Metadata API')


@app.get('/metadata')
def metadata():
    return USER_API


@app.get('/metadata-charset')
def metadata_charset():
    return Response(
        content=json.dumps(USER_API), media_type='application/json; charset=utf-8'
    )


@app.get('/text')
def text():
    return PlainTextResponse('not json')


@app.get('/no-content-type')
def no_content_type():
    return Response(content=json.dumps(USER_API).encode())


@app.get('/missing-services')
def missing_services():
    return {'types': []}


@app.get('/null-types')
def null_types():
    return {'types': None, 'services': []}


@app.get('/list')
def json_list():
    return []


@app.get('/broken-json')
def broken_json():
    return Response(content='{"types": [', media_type='application/json')


@app.get('/bad-shape')
def bad_shape():
    return {'types': [{'name': 'User'}], 'services': []}


@app.get('/unavailable')
def unavailable():
    raise HTTPException(status_code=503, detail='down')


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=BASE_URL)


class TestFetchValid:
    """Fetching well-formed descriptions."""

    @pytest.mark.asyncio
    async def test_fetch_description(self):
        """Test that a JSON description is parsed."""
        async with _client() as client:
            api = await DefinitionFetcher(http_client=client).fetch(
                f'{BASE_URL}/metadata'
            )

        assert [t.name for t in api.types] == ['User']
        assert api.services[0].name == 'UserService'

    @pytest.mark.asyncio
    async def test_content_type_with_parameters(self):
        """Test that parameters after application/json are accepted."""
        async with _client() as client:
            api = await DefinitionFetcher(http_client=client).fetch(
                f'{BASE_URL}/metadata-charset'
            )

        assert api.services[0].operations[0].name == 'getUser'

    @pytest.mark.asyncio
    async def test_default_client_skips_certificate_verification(self):
        """Test that the default client is created with verification disabled."""
        url = f'{BASE_URL}/metadata'
        response = httpx.Response(200, json=USER_API, request=httpx.Request('GET', url))

        with patch('tsgen.codegen.fetcher.httpx.AsyncClient') as mock_client_class:
            mock_client = mock_client_class.return_value.__aenter__.return_value
            mock_client.get = AsyncMock(return_value=response)

            api = await DefinitionFetcher(timeout=5.0).fetch(url)

        mock_client_class.assert_called_once_with(verify=False, timeout=5.0)
        mock_client.get.assert_awaited_once_with(url)
        assert api.types[0].name == 'User'


class TestFetchErrors:
    """Fetching invalid descriptions."""

    @pytest.mark.asyncio
    async def test_text_plain_raises_content_type_error(self):
        """Test that a non-JSON content type is rejected."""
        async with _client() as client:
            with pytest.raises(ContentTypeError) as exc_info:
                await DefinitionFetcher(http_client=client).fetch(f'{BASE_URL}/text')

        assert exc_info.value.content_type.startswith('text/plain')
        assert exc_info.value.url == f'{BASE_URL}/text'

    @pytest.mark.asyncio
    async def test_missing_content_type(self):
        """Test that an absent content type is rejected."""
        async with _client() as client:
            with pytest.raises(ContentTypeError) as exc_info:
                await DefinitionFetcher(http_client=client).fetch(
                    f'{BASE_URL}/no-content-type'
                )

        assert exc_info.value.content_type is None

    @pytest.mark.asyncio
    async def test_missing_services(self):
        """Test that a description without services is malformed."""
        async with _client() as client:
            with pytest.raises(MalformedResponseError) as exc_info:
                await DefinitionFetcher(http_client=client).fetch(
                    f'{BASE_URL}/missing-services'
                )

        assert exc_info.value.body == {'types': []}
        assert exc_info.value.errors == ['missing services']

    @pytest.mark.asyncio
    async def test_null_types(self):
        """Test that null is treated like an absent field."""
        async with _client() as client:
            with pytest.raises(MalformedResponseError) as exc_info:
                await DefinitionFetcher(http_client=client).fetch(
                    f'{BASE_URL}/null-types'
                )

        assert exc_info.value.errors == ['missing types']

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        """Test that a JSON array is malformed."""
        async with _client() as client:
            with pytest.raises(MalformedResponseError) as exc_info:
                await DefinitionFetcher(http_client=client).fetch(f'{BASE_URL}/list')

        assert exc_info.value.body == []

    @pytest.mark.asyncio
    async def test_broken_json(self):
        """Test that an undecodable body keeps the raw text."""
        async with _client() as client:
            with pytest.raises(MalformedResponseError) as exc_info:
                await DefinitionFetcher(http_client=client).fetch(
                    f'{BASE_URL}/broken-json'
                )

        assert exc_info.value.body == '{"types": ['

    @pytest.mark.asyncio
    async def test_invalid_declaration_shape(self):
        """Test that validation errors are listed."""
        async with _client() as client:
            with pytest.raises(MalformedResponseError) as exc_info:
                await DefinitionFetcher(http_client=client).fetch(
                    f'{BASE_URL}/bad-shape'
                )

        assert any(error.startswith('types.0.') for error in exc_info.value.errors)

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        """Test that error statuses propagate as httpx errors."""
        async with _client() as client:
            with pytest.raises(httpx.HTTPStatusError):
                await DefinitionFetcher(http_client=client).fetch(
                    f'{BASE_URL}/unavailable'
                )

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        """Test that connection failures are not wrapped."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(httpx.ConnectError):
                await DefinitionFetcher(http_client=client).fetch(
                    f'{BASE_URL}/metadata'
                )
