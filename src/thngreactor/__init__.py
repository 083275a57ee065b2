import importlib
import logging

from .conf import defaults

__version__ = "0.2.0"
__all__ = ('config', 'logger', 'setupModule')

CONFIG_SUFFIXES = ('._meta', '.conf', '._config', '.config', '.cfg')


def _config_name(module):
    if isinstance(module, str):
        for suffix in CONFIG_SUFFIXES:
            if module.endswith(suffix):
                return module[:-len(suffix)]

    return module


def setupModule(module_name, *upstreams):
    ''' Create the (config, logger) pair of a sub-package.

        Called from `<package>/_meta/__init__.py`, in which case the
        defaults are loaded from `<package>/_meta/defaults.py` and the
        config section is named after the package itself.
    '''
    from thngreactor.logs import getLogger
    from thngreactor.conf import getConfig

    config_key = _config_name(module_name)

    if not upstreams:
        try:
            upstreams = (importlib.import_module(f"{module_name}.defaults"),)
        except ImportError as e:
            logging.warning(
                f"Unable to import configuration defaults for module [{module_name}]. {e}"
            )

    config = getConfig(config_key, *upstreams)
    logger = getLogger(config_key, config)
    return config, logger


config, logger = setupModule(__name__, defaults)
