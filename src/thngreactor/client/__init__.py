from ._meta import config, logger  # noqa
from .exceptions import RemoteOperationError  # noqa
from .base import EntityClient, EntityClientRegistry  # noqa
from .memory import MemoryEntityClient, EntityCall, CREATE_ACTION, UPDATE_PROPERTY  # noqa
from .http import HttpEntityClient  # noqa


def create_client(key=None, **kwargs) -> EntityClient:
    ''' Construct the entity client registered under `key`,
        defaults to the configured ENTITY_CLIENT '''
    return EntityClientRegistry.construct(key or config.ENTITY_CLIENT, **kwargs)
