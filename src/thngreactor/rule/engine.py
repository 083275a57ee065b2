import asyncio
from typing import Callable, Tuple

from .condition import as_action_predicate, as_property_predicate
from .datadef import ActionEvent, PropertyChangeEvent, RuleOutcome
from .dispatcher import OutputDispatcher
from .exceptions import MissingTargetError, RuleEvaluationError
from .table import ACTION_RULES, PROPERTY_RULES, RuleTable
from .validator import describe_rule, rule_attr, validate_rule
from . import logger, config

DEBUG_RULE_ENGINE = config.DEBUG_RULE_ENGINE


class RuleEvaluator(object):
    ''' Evaluate a rule table against one event.

        Every rule of the table runs as its own branch. Branches are started
        in table order and run concurrently; the predicate check and the
        payload construction of a branch never suspend, only the dispatch
        does. All branches settle before the evaluation returns, and any
        failed branch turns the whole pass into a `RuleEvaluationError`.
    '''

    def __init__(self, client, action_rules: RuleTable = ACTION_RULES, property_rules: RuleTable = PROPERTY_RULES):
        self._dispatcher = OutputDispatcher(client)
        self._action_rules = action_rules
        self._property_rules = property_rules

    @property
    def dispatcher(self) -> OutputDispatcher:
        return self._dispatcher

    @property
    def action_rules(self) -> RuleTable:
        return self._action_rules

    @property
    def property_rules(self) -> RuleTable:
        return self._property_rules

    async def check_action_rules(self, event) -> Tuple[RuleOutcome, ...]:
        event = ActionEvent.create(event)
        action = event.action

        def _match(rule, descriptor):
            predicate = as_action_predicate(rule_attr(rule, 'when'))
            if not predicate(action):
                DEBUG_RULE_ENGINE and logger.debug(
                    'Action rule [%s] skipped. Unmatched action type [%s]', descriptor, action.type)
                return RuleOutcome(rule=descriptor)

            if not action.thng:
                raise MissingTargetError(
                    "R00.002",
                    f"Thng not specified, action rule [{descriptor}] not applied.",
                    {"action": action.type}
                )

            payload = rule_attr(rule, 'create')(action)
            logger.info('Running action rule [%s] on thng [%s]', descriptor, action.thng)
            return RuleOutcome(rule=descriptor, matched=True, target=action.thng, payload=payload)

        return await self._evaluate(self.action_rules, _match)

    async def check_property_rules(self, event) -> Tuple[RuleOutcome, ...]:
        event = PropertyChangeEvent.create(event)
        thng_id = event.thng.id

        def _match(rule, descriptor):
            predicate = as_property_predicate(rule_attr(rule, 'when'))

            # At most one changed key fires a rule, the first one matching.
            for key, change in event.changes.items():
                if predicate(key, change.new_value):
                    break
            else:
                DEBUG_RULE_ENGINE and logger.debug(
                    'Property rule [%s] skipped. No matching change in %s', descriptor, list(event.changes))
                return RuleOutcome(rule=descriptor)

            payload = rule_attr(rule, 'create')(key, change.new_value)
            logger.info('Running property rule [%s] on thng [%s] (changed: %s)', descriptor, thng_id, key)
            return RuleOutcome(rule=descriptor, matched=True, target=thng_id, payload=payload)

        return await self._evaluate(self.property_rules, _match)

    async def _run_branch(self, rule, match: Callable) -> RuleOutcome:
        descriptor = describe_rule(rule)
        outcome = RuleOutcome(rule=descriptor)

        try:
            validate_rule(rule)
            outcome = match(rule, descriptor)
            if not outcome.matched:
                return outcome

            result = await self.dispatcher.dispatch(outcome.target, outcome.payload)
            return outcome.set(result=result)
        except Exception as e:
            return outcome.set(error=e)

    async def _evaluate(self, rules: RuleTable, match: Callable) -> Tuple[RuleOutcome, ...]:
        outcomes = await asyncio.gather(*(self._run_branch(rule, match) for rule in rules))

        if any(not o.ok for o in outcomes):
            raise RuleEvaluationError(getattr(rules, 'name', 'rules'), outcomes)

        return tuple(outcomes)
