from thngreactor.client.exceptions import RemoteOperationError  # noqa
from thngreactor.error import ReactorException


class RuleError(ReactorException):
    """Failure of a single rule branch"""
    errcode = "R00.000"


class InvalidRuleError(RuleError):
    """Rule is structurally malformed"""
    errcode = "R00.001"


class MissingTargetError(RuleError):
    """Matched rule has no thng to write to"""
    errcode = "R00.002"


class PayloadClassificationError(RuleError):
    """Rule output is neither an action nor a property update"""
    errcode = "R00.003"


class RuleEvaluationError(RuleError):
    """One or more rule branches failed during an evaluation pass"""
    errcode = "R00.100"

    def __init__(self, ruleset, outcomes):
        self.ruleset = ruleset
        self.outcomes = tuple(outcomes)
        self.errors = tuple(o.error for o in self.outcomes if o.error is not None)

        failed = [o.rule for o in self.outcomes if o.error is not None]
        super().__init__(
            self.errcode,
            f"{len(failed)} of {len(self.outcomes)} [{ruleset}] rule(s) failed. First error: {self.errors[0]}",
            {"failed": failed}
        )
