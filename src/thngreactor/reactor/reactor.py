from thngreactor.error import ErrorTracker
from thngreactor.helper import when
from thngreactor.rule import RuleEvaluator

from .signal import ReactorSignal, ReactorSignalManager
from . import logger, config


class RuleReactor(ReactorSignalManager):
    ''' Entry points bound to the host runtime.

        Each handler evaluates its rule table, reports any failure to the
        error tracker and calls `done` exactly once. Nothing raised by the
        rules reaches the host.
    '''

    def __init__(self, evaluator: RuleEvaluator, tracker: ErrorTracker = None):
        self._evaluator = evaluator
        self._tracker = tracker or ErrorTracker.get_tracker(config.ERROR_TRACKER)
        self.register_signals()

    @property
    def evaluator(self) -> RuleEvaluator:
        return self._evaluator

    @property
    def tracker(self) -> ErrorTracker:
        return self._tracker

    async def on_action_created(self, event, done=None):
        return await self.handle(event, self.evaluator.check_action_rules, done)

    async def on_thng_properties_changed(self, event, done=None):
        return await self.handle(event, self.evaluator.check_property_rules, done)

    onActionCreated = on_action_created
    onThngPropertiesChanged = on_thng_properties_changed

    async def handle(self, event, evaluate, done=None):
        handler = evaluate.__name__
        outcomes = None

        try:
            outcomes = await evaluate(event)
        except Exception as e:
            self._capture(e, handler=handler)
            await self._notify(ReactorSignal.EVENT_FAILED, handler, event=event, error=e)
        else:
            await self._notify(ReactorSignal.EVENT_COMPLETED, handler, event=event, outcomes=outcomes)
        finally:
            await self._complete(done, handler)

        return outcomes

    def _capture(self, error, **context):
        try:
            self.tracker.capture_exception(error, **context)
        except Exception:
            logger.exception('Error tracker failed to capture [%s] %s', type(error).__name__, context)

    async def _notify(self, signal, handler, **kwargs):
        try:
            await self.publish(signal, self, **kwargs)
        except Exception as e:
            logger.warning('Signal subscriber failed for [%s]: %s', handler, e)
            self._capture(e, handler=handler, stage='signal')

    async def _complete(self, done, handler):
        if done is None:
            return

        try:
            await when(done())
        except Exception as e:
            self._capture(e, handler=handler, stage='done')
