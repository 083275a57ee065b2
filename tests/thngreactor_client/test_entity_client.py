import pytest

from aiohttp import web
from aiohttp.test_utils import TestServer

from thngreactor.error import RegistryError
from thngreactor.client import (
    CREATE_ACTION,
    UPDATE_PROPERTY,
    EntityClientRegistry,
    HttpEntityClient,
    MemoryEntityClient,
    RemoteOperationError,
    config,
    create_client,
)
from thngreactor.rule import Rule, RuleEvaluator, RuleTable, create_action, set_property, FROM_VALUE


def entity_api(received):
    async def create_action(request):
        received.append((
            request.method,
            request.match_info['thng'],
            request.match_info['action_type'],
            await request.json(),
            request.headers.get('authorization')
        ))
        return web.json_response({'id': 'A1', 'type': request.match_info['action_type']}, status=201)

    async def update_property(request):
        body = await request.json()
        received.append((request.method, request.match_info['thng'], None, body, request.headers.get('authorization')))
        if body.get('key') == 'forbidden':
            return web.json_response({'errors': ['Property is read-only']}, status=403)

        return web.json_response([body])

    app = web.Application()
    app.router.add_post('/thngs/{thng}/actions/{action_type}', create_action)
    app.router.add_put('/thngs/{thng}/properties', update_property)
    return app


@pytest.mark.asyncio
async def test_http_create_action():
    received = []

    async with TestServer(entity_api(received)) as server:
        client = HttpEntityClient(api_url=str(server.make_url('/')), api_key='secret-key')
        result = await client.create_action('T1', '_ForecastAlert', {
            'type': '_ForecastAlert',
            'customFields': {'conditions': 'rain'}
        })

    assert result == {'id': 'A1', 'type': '_ForecastAlert'}
    assert received == [(
        'POST', 'T1', '_ForecastAlert',
        {'type': '_ForecastAlert', 'customFields': {'conditions': 'rain'}},
        'secret-key'
    )]


@pytest.mark.asyncio
async def test_http_update_property():
    received = []

    async with TestServer(entity_api(received)) as server:
        client = HttpEntityClient(api_url=str(server.make_url('/')), api_key='secret-key')
        result = await client.update_property('T2', {'key': 'overheating', 'value': True})

    assert result == [{'key': 'overheating', 'value': True}]
    assert received[0][:2] == ('PUT', 'T2')
    assert received[0][3] == {'key': 'overheating', 'value': True}


@pytest.mark.asyncio
async def test_http_error_status():
    async with TestServer(entity_api([])) as server:
        client = HttpEntityClient(api_url=str(server.make_url('/')))

        with pytest.raises(RemoteOperationError) as exc:
            await client.update_property('T2', {'key': 'forbidden', 'value': 1})

    assert exc.value.details['status'] == 403
    assert 'read-only' in exc.value.details['response']


@pytest.mark.asyncio
async def test_http_unknown_route():
    async with TestServer(entity_api([])) as server:
        client = HttpEntityClient(api_url=str(server.make_url('/')) + 'v2')

        with pytest.raises(RemoteOperationError) as exc:
            await client.create_action('T1', '_Alert', {'type': '_Alert'})

    assert exc.value.details['status'] == 404


@pytest.mark.asyncio
async def test_http_connection_failure():
    async with TestServer(entity_api([])) as server:
        url = str(server.make_url('/'))

    # Server is closed at this point
    client = HttpEntityClient(api_url=url)
    with pytest.raises(RemoteOperationError) as exc:
        await client.update_property('T2', {'key': 'active', 'value': True})

    assert exc.value.__cause__ is not None


@pytest.mark.asyncio
async def test_http_action_rule_copies_the_action():
    received = []
    rules = RuleTable(
        'action',
        Rule(key='last-scan', when='scans', create=set_property('last_scan')),
        Rule(key='echo', when='scans', create=create_action('_ScanEcho', scan=FROM_VALUE)),
    )
    action = {'type': 'scans', 'thng': 'T1', 'location': 'dock-4'}

    async with TestServer(entity_api(received)) as server:
        client = HttpEntityClient(api_url=str(server.make_url('/')))
        outcomes = await RuleEvaluator(client, action_rules=rules).check_action_rules({'action': action})

    assert all(o.ok for o in outcomes)
    bodies = sorted((r[0], r[3]) for r in received)
    assert bodies == [
        ('POST', {'type': '_ScanEcho', 'customFields': {'scan': action}}),
        ('PUT', {'key': 'last_scan', 'value': action}),
    ]


@pytest.mark.asyncio
async def test_http_property_update_keeps_none():
    received = []

    async with TestServer(entity_api(received)) as server:
        client = HttpEntityClient(api_url=str(server.make_url('/')))
        rules = RuleTable('property', Rule(key='clear', when='temperature_celsius is None', create=set_property('reading')))
        await RuleEvaluator(client, property_rules=rules).check_property_rules({
            'thng': {'id': 'T2'},
            'changes': {'temperature_celsius': {'newValue': None}}
        })

    assert received[0][3] == {'key': 'reading', 'value': None}


def test_http_client_headers():
    assert 'authorization' not in HttpEntityClient(api_url='http://localhost').headers()
    assert HttpEntityClient(api_url='http://localhost', api_key='k').headers()['authorization'] == 'k'


@pytest.mark.asyncio
async def test_memory_client_records_calls():
    client = MemoryEntityClient()
    await client.create_action('T1', '_Alert', {'type': '_Alert'})
    await client.update_property('T1', {'key': 'active', 'value': True})

    assert [c.operation for c in client.calls] == [CREATE_ACTION, UPDATE_PROPERTY]
    assert client.calls[0].action_type == '_Alert'
    assert client.calls[1].action_type is None

    client.reset()
    assert client.calls == ()


def test_client_registry():
    assert set(EntityClientRegistry.keys()) >= {'http', 'memory'}
    assert isinstance(create_client('memory'), MemoryEntityClient)

    default = create_client()
    assert isinstance(default, HttpEntityClient)
    assert default.api_url == config.ENTITY_API_URL

    with pytest.raises(RegistryError):
        create_client('carrier-pigeon')
