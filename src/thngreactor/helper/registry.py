from thngreactor import logger
from thngreactor.error import RegistryError

from . import camel_to_lower


class ClassRegistry(object):
    ''' Pluggable implementations of `base_class`, looked up by key.

        `register` works as a bare decorator (`@registry.register`, key
        derived from the class name) or with an explicit key
        (`@registry.register('memory')`).
    '''

    def __init__(self, base_class):
        self.base_class = base_class
        self._classes = {}

    @property
    def name(self):
        return self.base_class.__name__

    def register(self, key=None):
        if isinstance(key, type):
            return self._add(camel_to_lower(key.__name__), key)

        def _decorator(cls):
            return self._add(camel_to_lower(cls.__name__) if key is None else key, cls)

        return _decorator

    def _add(self, key, cls):
        if key in self._classes:
            raise RegistryError("H00.302", f"Key [{key}] already registered in registry [{self.name}]")

        if not issubclass(cls, self.base_class):
            raise RegistryError("H00.303", f"Class [{cls.__name__}] is not a [{self.name}]")

        cls.__clsid__ = key
        self._classes[key] = cls
        logger.debug('Registered %s [%s => %s]', self.name, key, cls.__name__)
        return cls

    def get(self, key):
        try:
            return self._classes[key]
        except KeyError:
            raise RegistryError("H00.401", f"No [{self.name}] registered under [{key}]") from None

    def construct(self, key, *args, **kwargs):
        return self.get(key)(*args, **kwargs)

    def keys(self):
        return tuple(self._classes)
