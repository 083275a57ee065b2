import json

from collections.abc import Mapping

from .exceptions import InvalidRuleError

RULE_FIELDS = ('key', 'description', 'when', 'create')


def rule_attr(rule, name):
    if isinstance(rule, Mapping):
        return rule.get(name)

    return getattr(rule, name, None)


def _json_default(value):
    if callable(value):
        return getattr(value, '__qualname__', repr(value))

    return repr(value)


def serialize_rule(rule):
    if isinstance(rule, Mapping):
        data = dict(rule)
    else:
        data = {k: rule_attr(rule, k) for k in RULE_FIELDS}

    return json.dumps(data, default=_json_default, sort_keys=True)


def describe_rule(rule):
    ''' Short human readable descriptor used in logs and outcomes. '''
    key = rule_attr(rule, 'key')
    if key:
        return str(key)

    when = rule_attr(rule, 'when')
    if isinstance(when, str):
        return when

    return getattr(when, '__qualname__', repr(when))


def validate_rule(rule):
    when = rule_attr(rule, 'when')
    create = rule_attr(rule, 'create')

    if when not in (None, '') and create is not None and callable(create):
        return

    raise InvalidRuleError(
        "R00.001",
        f"Rule is invalid: {serialize_rule(rule)}"
    )
