import inspect
from typing import Any


async def resolve(value: Any) -> Any:
    """Дожидается результата, если колбэк оказался асинхронным."""
    if inspect.isawaitable(value):
        return await value
    return value
