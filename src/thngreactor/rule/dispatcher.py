from collections.abc import Mapping
from pydantic import ValidationError

from thngreactor.error import ReactorException

from .datadef import ActionPayload, PropertyPayload
from .exceptions import PayloadClassificationError, RemoteOperationError
from . import logger, config

DEBUG_RULE_ENGINE = config.DEBUG_RULE_ENGINE


def _is_action(payload):
    return isinstance(payload.get('type'), str) and bool(payload['type'])


def _is_property(payload):
    return isinstance(payload.get('key'), str) and bool(payload['key']) and 'value' in payload


def classify_payload(payload):
    ''' Return the tagged form of a rule output.

        Tagged payloads are taken as they are. Mappings are inspected
        structurally, action shape first.
    '''
    if isinstance(payload, ActionPayload):
        if payload.type:
            return payload
    elif isinstance(payload, PropertyPayload):
        if payload.key:
            return payload
    elif isinstance(payload, Mapping):
        if _is_action(payload):
            try:
                return ActionPayload.create(dict(payload))
            except ValidationError as e:
                raise PayloadClassificationError(
                    "R00.003",
                    f"Malformed action payload: {payload!r}",
                    {"error": str(e)}
                ) from e

        if _is_property(payload):
            return PropertyPayload(key=payload['key'], value=payload['value'])

    raise PayloadClassificationError(
        "R00.003",
        f"Rule output is neither an action nor a property update: {payload!r}"
    )


class OutputDispatcher(object):
    def __init__(self, client):
        self._client = client

    @property
    def client(self):
        return self._client

    async def dispatch(self, thng_id, payload):
        output = classify_payload(payload)

        try:
            if isinstance(output, ActionPayload):
                DEBUG_RULE_ENGINE and logger.debug('Create action [%s] on thng [%s]', output.type, thng_id)
                return await self._client.create_action(thng_id, output.type, output.serialize())

            DEBUG_RULE_ENGINE and logger.debug('Update property [%s] on thng [%s]', output.key, thng_id)
            return await self._client.update_property(thng_id, output.serialize())
        except ReactorException:
            raise
        except Exception as e:
            raise RemoteOperationError(
                "R00.004",
                f"Entity API call failed for thng [{thng_id}]: {e}",
                {"payload": output.serialize()}
            ) from e
