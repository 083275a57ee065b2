from thngreactor import config, logger
from .tracker import ErrorTracker, LogTracker, NullTracker  # noqa


DEBUG_APP_EXCEPTION = config.DEBUG_APP_EXCEPTION


class ReactorException(Exception):
    ''' Base error of the package. `errcode` identifies the failure
        (`<area><nn>.<nnn>`), `details` carries structured context. '''

    errcode = "A00.000"

    def __init__(self, errcode, message, details=None):
        super().__init__(message)
        self.errcode = errcode
        self.message = message
        self.details = details

        DEBUG_APP_EXCEPTION and logger.exception(message)

    def __str__(self):
        text = f"{self.errcode} >> {self.message}"
        return text if self.details is None else f"{text} >> {self.details}"


class RegistryError(ReactorException):
    """Class registry lookup or registration failed"""
    errcode = "H00.300"
