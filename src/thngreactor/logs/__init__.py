''' Per package loggers configured from the module config:
    LOG_LEVEL, LOG_OUTPUT (handler spec), LOG_FORMATTER, LOG_DATEFMT and
    LOG_COLORED.
'''
import logging
import sys
from logging import handlers
from typing import Optional

import coloredlogs

from thngreactor.conf import ModuleConfig, default_config, getConfig

_LOGGERS = {}

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# (prefix, handler factory, default port)
NETWORK_HANDLERS = (
    ("syslog://", lambda host, port: handlers.SysLogHandler(
        address=(host, port), facility=handlers.SysLogHandler.LOG_LOCAL0), 514),
    ("udp://", handlers.DatagramHandler, None),
    ("tcp://", handlers.SocketHandler, None),
)


def getLoggerHandler(logspec: Optional[str] = None) -> logging.Handler:
    ''' Build a handler from a spec: `stderr`, `stdout`, `file://<path>`,
        `syslog://host[:port]`, `udp://host:port` or `tcp://host:port`. '''
    if logspec is None or logspec == "stderr":
        return logging.StreamHandler(sys.stderr)

    if logspec == "stdout":
        return logging.StreamHandler(sys.stdout)

    if logspec.startswith("file://"):
        return logging.FileHandler(logspec[len("file://"):])

    for prefix, factory, defport in NETWORK_HANDLERS:
        if logspec.startswith(prefix):
            host, _, port = logspec[len(prefix):].partition(":")
            return factory(host or "localhost", int(port) if port else defport)

    raise ValueError(f"Cannot parse logging spec: {logspec}")


def _formatter(log_config: ModuleConfig) -> Optional[logging.Formatter]:
    fmt, datefmt = log_config.get("LOG_FORMATTER"), log_config.get("LOG_DATEFMT")
    if not isinstance(fmt, str):
        return None

    if log_config.get("LOG_COLORED"):
        return coloredlogs.ColoredFormatter(fmt=fmt, datefmt=datefmt)

    return logging.Formatter(fmt, datefmt)


def setupLogger(module_name: Optional[str], log_config: ModuleConfig) -> logging.Logger:
    module_logger = logging.getLogger(module_name)

    level = str(log_config.get("LOG_LEVEL")).upper()
    module_logger.setLevel(logging.getLevelName(level) if level in LOG_LEVELS else logging.NOTSET)

    log_handlers = []
    if log_config.get("LOG_OUTPUT"):
        handler = getLoggerHandler(log_config.get("LOG_OUTPUT"))
        formatter = _formatter(log_config)
        if formatter is not None:
            handler.setFormatter(formatter)
        log_handlers.append(handler)

    # The root logger only gets handlers when it has none yet
    if module_name is None:
        logging.basicConfig(handlers=log_handlers)
    else:
        for handler in log_handlers:
            module_logger.addHandler(handler)

    _LOGGERS[module_name] = module_logger
    return module_logger


def getLogger(module_name, log_config=None) -> logging.Logger:
    if module_name in _LOGGERS:
        return _LOGGERS[module_name]

    return setupLogger(module_name, log_config or getConfig(module_name))


default_logger = setupLogger(None, default_config)
