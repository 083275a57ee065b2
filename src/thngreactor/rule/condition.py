''' Statement predicates and output producer helpers for rule tables.

    Action rules accept the action type as a statement:

        Rule(when='scans', create=set_property('active', True))

    Property rules accept a `<key> <operator> <value>` statement:

        Rule(when='temperature_celsius >= 100', create=set_property('overheating', True))
        Rule(when='weather_report includes rain',
             create=create_action('_ForecastAlert', conditions=FROM_VALUE))

    `FROM_VALUE` is replaced by the triggering value: the new property value
    for property rules, the triggering action (as plain data) for action rules.

    A comparison the changed value does not support (`None >= 100`,
    `'hot' > 100`) does not hold, so the rule simply does not fire.
'''
import ast
import operator

from thngreactor.data import DataModel

from .datadef import ActionPayload, PropertyPayload
from .exceptions import InvalidRuleError
from . import logger, config

DEBUG_RULE_ENGINE = config.DEBUG_RULE_ENGINE


def _includes(value, expected):
    return str(expected) in str(value)


def _is(value, expected):
    return str(value) == str(expected)


OPERATORS = {
    '>': operator.gt,
    '>=': operator.ge,
    '==': operator.eq,
    '<': operator.lt,
    '<=': operator.le,
    '!=': operator.ne,
    'includes': _includes,
    'is': _is,
}

# Operators comparing the textual form keep the literal as written
TEXT_OPERATORS = ('includes', 'is')


class _FromValue(object):
    def __repr__(self):
        return 'FROM_VALUE'


FROM_VALUE = _FromValue()


def parse_literal(text):
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError):
        return text


def parse_statement(statement):
    tokens = statement.split(None, 2)
    if len(tokens) != 3:
        raise InvalidRuleError(
            "R00.001",
            f"Invalid rule statement [{statement}]. Expected: <key> <operator> <value>"
        )

    key, op, raw = tokens
    if op not in OPERATORS:
        raise InvalidRuleError("R00.001", f"Invalid rule operator: {op}", {"statement": statement})

    value = raw if op in TEXT_OPERATORS else parse_literal(raw)
    return key, op, value


def property_condition(statement):
    key, op, expected = parse_statement(statement)
    compare = OPERATORS[op]

    def _predicate(changed_key, new_value):
        if changed_key != key:
            return False

        try:
            return bool(compare(new_value, expected))
        except TypeError:
            DEBUG_RULE_ENGINE and logger.debug(
                'Statement [%s] does not apply to value [%r]', statement, new_value)
            return False

    _predicate.__qualname__ = statement
    return _predicate


def action_condition(action_type):
    def _predicate(action):
        return action.type == action_type

    _predicate.__qualname__ = action_type
    return _predicate


def _as_predicate(when, factory):
    if callable(when):
        return when

    if isinstance(when, str):
        return factory(when)

    raise InvalidRuleError("R00.001", f"Rule predicate is not interpretable: {when!r}")


def as_action_predicate(when):
    return _as_predicate(when, action_condition)


def as_property_predicate(when):
    return _as_predicate(when, property_condition)


def _resolve(value, args):
    if value is not FROM_VALUE:
        return value

    value = args[-1]
    return value.serialize() if isinstance(value, DataModel) else value


def set_property(key, value=FROM_VALUE):
    def _producer(*args):
        return PropertyPayload(key=key, value=_resolve(value, args))

    _producer.__qualname__ = f"set_property({key!r}, {value!r})"
    return _producer


def create_action(action_type, **custom_fields):
    def _producer(*args):
        if not custom_fields:
            return ActionPayload(type=action_type)

        fields = {k: _resolve(v, args) for k, v in custom_fields.items()}
        return ActionPayload(type=action_type, custom_fields=fields)

    _producer.__qualname__ = f"create_action({action_type!r})"
    return _producer
