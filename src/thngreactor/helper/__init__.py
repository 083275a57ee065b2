import inspect
import re

RX_CAMEL_TO_LOWER = re.compile(r'(?<!^)(?=[A-Z])')


def camel_to_lower(name, sep='-'):
    return RX_CAMEL_TO_LOWER.sub(sep, name).lower()


async def when(value):
    ''' Await the value if it is awaitable, return it as is otherwise. '''
    if inspect.isawaitable(value):
        return await value

    return value


from .registry import ClassRegistry  # noqa: E402
