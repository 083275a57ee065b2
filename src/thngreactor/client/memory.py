from pyrsistent import PClass, field

from .base import EntityClient, EntityClientRegistry
from . import logger, config

DEBUG_ENTITY_CLIENT = config.DEBUG_ENTITY_CLIENT

CREATE_ACTION = 'create-action'
UPDATE_PROPERTY = 'update-property'


class EntityCall(PClass):
    operation = field(type=str, mandatory=True)
    thng_id = field(type=str, mandatory=True)
    action_type = field(type=(str, type(None)), initial=None)
    body = field(initial=None)


@EntityClientRegistry.register('memory')
class MemoryEntityClient(EntityClient):
    ''' Record calls instead of sending them. Nothing is persisted. '''

    def __init__(self):
        self._calls = []

    @property
    def calls(self):
        return tuple(self._calls)

    def reset(self):
        self._calls = []

    def _record(self, call):
        DEBUG_ENTITY_CLIENT and logger.debug('Recorded entity call: %s', call)
        self._calls.append(call)
        return call

    async def create_action(self, thng_id, action_type, body):
        return self._record(EntityCall(
            operation=CREATE_ACTION,
            thng_id=thng_id,
            action_type=action_type,
            body=body
        ))

    async def update_property(self, thng_id, body):
        return self._record(EntityCall(operation=UPDATE_PROPERTY, thng_id=thng_id, body=body))
