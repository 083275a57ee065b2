''' Module configuration.

    Every package declares UPPERCASE defaults in `<package>/_meta/defaults.py`.
    Values are looked up, in order, in the ini section named after the
    package, in the package defaults and finally in `sysdefaults`. Ini text
    is coerced to the type of the default it overrides.
'''
import configparser
import json
import logging
import os
import re

from . import sysdefaults

THNGREACTOR_CONFIG_FILES = os.environ.get("THNGREACTOR_CONFIG_FILE", "base.ini|config.ini").split('|')
THNGREACTOR_SYSTEM_DEFAULTS = "thngreactor.sysdefaults"
DEBUG_ALL_CONFIG_VALUE = "#ALL"

RX_INVALID_OPTION = re.compile(r"[^A-Za-z\d_]+")


def _option_name(text):
    return RX_INVALID_OPTION.sub("_", text.strip()).upper()


def _coerce(parser, section, name, default):
    # bool before int, bool is an int
    if isinstance(default, bool):
        return parser.getboolean(section, name)
    if isinstance(default, int):
        return parser.getint(section, name)
    if isinstance(default, float):
        return parser.getfloat(section, name)
    if isinstance(default, (dict, list, tuple)):
        return json.loads(parser.get(section, name))
    if isinstance(default, (str, type(None))):
        return parser.get(section, name)

    raise ValueError(f"Not supported config value type [{type(default)}] for [{section}.{name}].")


class ModuleConfig(object):
    def __init__(self, name, values):
        self.__name__ = name
        self.__values__ = dict(values)

    def __getattr__(self, name):
        try:
            return self.__values__[name]
        except KeyError:
            raise AttributeError(f"Config [{self.__name__}] has no value [{name}]") from None

    def get(self, name, default=None):
        return self.__values__.get(name, default)

    def __repr__(self):
        return f"<ModuleConfig {self.__name__}>"


class ConfigStore(object):
    ''' Parsed ini files plus the module configs built from them.
        Missing files are skipped, every existing one is read. '''

    def __init__(self, files):
        self._files = files
        self._parser = configparser.ConfigParser()
        self._parser.optionxform = _option_name
        self._parser.read(files)
        self._modules = {}

    def load(self, section, *defaults) -> ModuleConfig:
        if section in self._modules:
            return self._modules[section]

        # Adding the section lets [DEFAULT] values apply to it
        if not self._parser.has_section(section):
            self._parser.add_section(section)

        values, sources = {}, {}
        for source in defaults + (sysdefaults,):
            for name, default in vars(source).items():
                if not name.isupper() or name in values:
                    continue

                if self._parser.has_option(section, name):
                    values[name] = _coerce(self._parser, section, name, default)
                    sources[name] = self._files
                else:
                    values[name] = default
                    sources[name] = source.__name__

        if sysdefaults.DEBUG_MODULE_CONFIG in (DEBUG_ALL_CONFIG_VALUE, section):
            logging.debug("=== MODULE CONFIG [%s] ===", section)
            for name, value in values.items():
                logging.debug(" - [%s] %r (from %s)", name, value, sources[name])

        config = self._modules[section] = ModuleConfig(section, values)
        return config

    def items(self):
        return self._modules.items()


_STORE = ConfigStore(THNGREACTOR_CONFIG_FILES)

getConfig = _STORE.load
list_config = _STORE.items
default_config = getConfig(THNGREACTOR_SYSTEM_DEFAULTS, sysdefaults)
