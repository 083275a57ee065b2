from ._meta import config, logger  # noqa
from .datadef import (  # noqa
    ActionEvent,
    ActionPayload,
    PropertyChangeEvent,
    PropertyPayload,
    Rule,
    RuleOutcome,
)
from .condition import FROM_VALUE, create_action, set_property, property_condition, action_condition  # noqa
from .validator import validate_rule, serialize_rule, describe_rule  # noqa
from .dispatcher import OutputDispatcher, classify_payload  # noqa
from .table import RuleTable, ACTION_RULES, PROPERTY_RULES  # noqa
from .engine import RuleEvaluator  # noqa
from .exceptions import (  # noqa
    InvalidRuleError,
    MissingTargetError,
    PayloadClassificationError,
    RuleError,
    RemoteOperationError,
    RuleEvaluationError,
)
