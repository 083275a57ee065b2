import traceback

from thngreactor import logger


class ErrorTracker:
    """Base class for error tracking implementations.

    Subclasses are automatically registered via __init_subclass__.
    Use capture_exception() to capture exceptions.
    """

    _REGISTRY = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        key = cls.__name__
        if key in cls._REGISTRY:
            raise ValueError(f"Error tracker is already registered: {key} => {cls._REGISTRY[key]}")

        cls._REGISTRY[key] = cls
        logger.debug(f"Registered error tracker: {key}")

    def capture_exception(self, exception: Exception, **kwargs):
        raise NotImplementedError("Subclasses must implement capture_exception")

    @classmethod
    def get_tracker(cls, name: str, **kwargs) -> 'ErrorTracker':
        """Get a tracker instance by name."""
        if name not in cls._REGISTRY:
            raise ValueError(f"Error tracker not found: {name}")

        return cls._REGISTRY[name](**kwargs)


class NullTracker(ErrorTracker):
    """A no-op tracker that does nothing."""

    def capture_exception(self, exception: Exception, **kwargs):
        logger.debug("NullTracker: Exception captured (no action taken): %s", exception)


class LogTracker(ErrorTracker):
    """Report captured exceptions to a logger at error level, traceback included."""

    def __init__(self, log=None):
        self.logger = log or logger

    def capture_exception(self, exception: Exception, **kwargs):
        context = " ".join(f"{k}={v}" for k, v in kwargs.items())
        trace = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
        self.logger.error("Captured exception [%s] %s\n%s", type(exception).__name__, context, trace)
