from ._meta import config, logger  # noqa
from .signal import ReactorSignal, ReactorSignalManager  # noqa
from .reactor import RuleReactor  # noqa

_REACTOR = None


def get_reactor() -> RuleReactor:
    ''' Default reactor, built on first use with the configured entity client. '''
    global _REACTOR

    if _REACTOR is None:
        from thngreactor.client import create_client
        from thngreactor.rule import RuleEvaluator

        _REACTOR = RuleReactor(RuleEvaluator(create_client()))

    return _REACTOR


def set_reactor(reactor):
    global _REACTOR
    _REACTOR = reactor
    return reactor


async def on_action_created(event, done=None):
    return await get_reactor().on_action_created(event, done)


async def on_thng_properties_changed(event, done=None):
    return await get_reactor().on_thng_properties_changed(event, done)


onActionCreated = on_action_created
onThngPropertiesChanged = on_thng_properties_changed
