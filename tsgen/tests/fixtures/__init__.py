"""Test fixtures for tsgen tests.

This module provides sample API description documents, in wire format, and
fake collaborators for testing the generation pipeline.
"""

from tsgen.definition import APIDescription
from tsgen.platform import PlatformConfig

# The documented end-to-end scenario: one type, one service, one operation
USER_API = {
    'types': [{'type': 'interface', 'name': 'User', 'definition': '{ id: number }'}],
    'services': [
        {
            'name': 'UserService',
            'operations': [
                {
                    'name': 'getUser',
                    'method': 'GET',
                    'path': '/user/:id',
                    'pathParams': [{'name': 'id', 'type': 'number'}],
                    'requestType': None,
                    'responseType': 'User',
                }
            ],
        }
    ],
}

# Several services sharing types, arrays, request bodies and primitives
STORE_API = {
    'types': [
        {'type': 'interface', 'name': 'Order', 'definition': '{ id: string; total: number }'},
        {'type': 'interface', 'name': 'OrderItem', 'definition': '{ sku: string }'},
        {'type': 'type', 'name': 'OrderId', 'definition': '= string'},
        {'type': 'interface', 'name': 'CreateOrderRequest', 'definition': '{ items: OrderItem[] }'},
    ],
    'services': [
        {
            'name': 'OrderService',
            'operations': [
                {
                    'name': 'list',
                    'method': 'GET',
                    'path': '/orders',
                    'pathParams': [],
                    'requestType': None,
                    'responseType': 'Order[]',
                },
                {
                    'name': 'get',
                    'method': 'GET',
                    'path': '/orders/:orderId',
                    'pathParams': [{'name': 'orderId', 'type': 'OrderId'}],
                    'requestType': None,
                    'responseType': 'Order',
                },
                {
                    'name': 'create',
                    'method': 'POST',
                    'path': '/orders',
                    'pathParams': [],
                    'requestType': 'CreateOrderRequest',
                    'responseType': 'OrderId',
                },
                {
                    'name': 'addItem',
                    'method': 'PUT',
                    'path': '/orders/:orderId/items/:position',
                    'pathParams': [
                        {'name': 'orderId', 'type': 'OrderId'},
                        {'name': 'position', 'type': 'number'},
                    ],
                    'requestType': 'OrderItem',
                    'responseType': 'void',
                },
            ],
        },
        {
            'name': 'HealthService',
            'operations': [
                {
                    'name': 'ping',
                    'method': 'GET',
                    'path': '/ping',
                    'pathParams': [],
                    'requestType': None,
                    'responseType': 'boolean',
                }
            ],
        },
        {'name': 'EmptyService', 'operations': []},
    ],
}

NO_TYPES_API = {
    'types': [],
    'services': USER_API['services'],
}

NO_SERVICES_API = {
    'types': USER_API['types'],
    'services': [],
}


def fake_render_call(method: str, path: str, params: str, body: str) -> str:
    return f'fake({method}|{path}|{params}|{body})'


FAKE_PLATFORM = PlatformConfig(
    type_file_import_path='@/types',
    ajax_function_import_statement='import { fake } from "./fake";',
    render_call=fake_render_call,
)


class StubFetcher:
    """Returns a fixed description, or raises a fixed error."""

    def __init__(self, document: dict | None = None, error: Exception | None = None):
        self.document = document
        self.error = error
        self.urls: list[str] = []

    async def fetch(self, url: str) -> APIDescription:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return APIDescription.model_validate(self.document)


class RecordingFormatter:
    """Formatter that only records its targets."""

    def __init__(self):
        self.targets: list[str] = []

    async def format(self, target: str) -> None:
        self.targets.append(target)
