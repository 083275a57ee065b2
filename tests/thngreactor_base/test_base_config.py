import logging
import pytest

import coloredlogs

from thngreactor.conf import ModuleConfig, getConfig, list_config
from thngreactor.error import RegistryError, ReactorException
from thngreactor.helper import ClassRegistry, camel_to_lower, when
from thngreactor.logs import getLogger, getLoggerHandler, setupLogger
from thngreactor.rule import InvalidRuleError, RemoteOperationError, RuleError, config as rule_config
from thngreactor.client import config as client_config


def test_module_config_defaults():
    assert rule_config.DEBUG_RULE_ENGINE is False
    assert client_config.ENTITY_CLIENT == 'http'
    # Falls back to the system defaults
    assert client_config.LOG_DATEFMT == "%H:%M:%S"
    assert rule_config.get('NOT_CONFIGURED') is None

    with pytest.raises(AttributeError):
        rule_config.NOT_CONFIGURED


def test_config_is_registered_once():
    assert getConfig('thngreactor.rule') is rule_config
    assert 'thngreactor.client' in dict(list_config())


def test_logger_handlers(tmp_path):
    assert isinstance(getLoggerHandler('stdout'), logging.StreamHandler)
    assert isinstance(getLoggerHandler(None), logging.StreamHandler)

    handler = getLoggerHandler(f"file://{tmp_path / 'reactor.log'}")
    assert isinstance(handler, logging.FileHandler)
    handler.close()

    with pytest.raises(ValueError):
        getLoggerHandler('carrier-pigeon://nest')


def test_module_loggers():
    logger = getLogger('thngreactor.rule')
    assert logger.name == 'thngreactor.rule'
    assert logger.level == logging.INFO
    assert getLogger('thngreactor.rule') is logger


def test_colored_log_output():
    log_config = ModuleConfig('thngreactor.tests.colored', {
        'LOG_LEVEL': 'debug',
        'LOG_OUTPUT': 'stdout',
        'LOG_COLORED': True,
        'LOG_FORMATTER': '%(levelname)s %(message)s',
        'LOG_DATEFMT': '%H:%M:%S',
    })

    logger = setupLogger('thngreactor.tests.colored', log_config)
    try:
        handler, = logger.handlers
        assert isinstance(handler.formatter, coloredlogs.ColoredFormatter)
        assert logger.level == logging.DEBUG
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)


def test_plain_log_output():
    log_config = ModuleConfig('thngreactor.tests.plain', {
        'LOG_LEVEL': 'nonsense',
        'LOG_OUTPUT': 'stdout',
        'LOG_COLORED': False,
        'LOG_FORMATTER': '%(message)s',
        'LOG_DATEFMT': None,
    })

    logger = setupLogger('thngreactor.tests.plain', log_config)
    try:
        handler, = logger.handlers
        assert not isinstance(handler.formatter, coloredlogs.ColoredFormatter)
        assert logger.level == logging.NOTSET
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)


def test_exception_rendering():
    error = InvalidRuleError("R00.001", "Rule is invalid: {}")
    assert isinstance(error, RuleError)
    assert str(error) == "R00.001 >> Rule is invalid: {}"

    error = RemoteOperationError("R00.004", "Entity API responded [500]", {"status": 500})
    assert isinstance(error, ReactorException)
    assert not isinstance(error, RuleError)
    assert str(error) == "R00.004 >> Entity API responded [500] >> {'status': 500}"


def test_class_registry():
    class Backend(object):
        pass

    BackendRegistry = ClassRegistry(Backend)

    @BackendRegistry.register
    class RedisBackend(Backend):
        pass

    @BackendRegistry.register('mem')
    class MemoryBackend(Backend):
        pass

    assert BackendRegistry.keys() == ('redis-backend', 'mem')
    assert isinstance(BackendRegistry.construct('mem'), MemoryBackend)

    with pytest.raises(RegistryError):
        BackendRegistry.register('mem')(MemoryBackend)

    with pytest.raises(RegistryError):
        BackendRegistry.register('other')(object)

    with pytest.raises(RegistryError) as exc:
        BackendRegistry.get('disk')

    assert exc.value.errcode == "H00.401"


def test_camel_to_lower():
    assert camel_to_lower('HttpEntityClient') == 'http-entity-client'


@pytest.mark.asyncio
async def test_when():
    async def compute():
        return 42

    assert await when(compute()) == 42
    assert await when(7) == 7
