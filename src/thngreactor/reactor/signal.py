import asyncio
import blinker
import enum

from thngreactor.helper import when


def _deferred(func):
    ''' Let coroutine receivers return their coroutine, awaited by `publish`. '''
    return func


class ReactorSignal(enum.Enum):
    EVENT_COMPLETED = "signal_event_completed"
    EVENT_FAILED    = "signal_event_failed"


class ReactorSignalManager(object):
    ''' Per instance blinker channels. Subscriptions declared on the class
        with `subscribe` are connected when the instance registers its signals. '''

    def register_signals(self):
        self.signal_event_completed = blinker.Signal()
        self.signal_event_failed = blinker.Signal()

        if not (subs := getattr(self, "_signal_subscriptions", None)):
            return

        for signal_key, subscribers in subs.items():
            channel = getattr(self, signal_key.value)
            for handler in subscribers:
                channel.connect(handler, weak=False)

    @classmethod
    def subscribe(cls, signal):
        if '_signal_subscriptions' not in cls.__dict__:
            cls._signal_subscriptions = {}

        subs = cls._signal_subscriptions
        subs.setdefault(signal, tuple())

        def _decorator(func):
            subs[signal] += (func, )
            return func

        return _decorator

    def connect(self, signal, func):
        getattr(self, signal.value).connect(func, weak=False)
        return func

    async def publish(self, signal, sender, **kwargs):
        ''' Send the signal and await every coroutine reply. All replies
            settle before the first subscriber error is raised. '''
        channel = getattr(self, signal.value)
        replies = channel.send(sender, _async_wrapper=_deferred, **kwargs)
        results = await asyncio.gather(*(when(rep) for _, rep in replies), return_exceptions=True)

        for result in results:
            if isinstance(result, BaseException):
                raise result

        return results
