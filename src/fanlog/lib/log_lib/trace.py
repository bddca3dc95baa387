"""
Function tracing decorator.

Writes DEBUG messages tagged 'trace' through the module-level Router
on function entry, return and exception.  A router in release mode
drops them, so tracing costs only a mode check there.
"""

import functools
import inspect
from pathlib import Path

from .levels import Level

TRACE_TAG = 'trace'


def _short_repr(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(func):
    """Decorator to trace function calls via the module-level Router.

    The messages carry the decorated function's source file and
    definition line as their origin.
    """
    module = inspect.getmodule(func)
    module_name = module.__name__ if module else "unknown"
    qualname = f"{module_name}.{func.__qualname__}"
    code = getattr(func, '__code__', None)
    origin = {
        'file': code.co_filename if code else '<unknown>',
        'line': code.co_firstlineno if code else 0,
    }

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import: the singleton may be replaced after decoration
        from .router import get_router

        router = get_router()
        if not router.debug_mode:
            return func(*args, **kwargs)

        parts = [_short_repr(a) for a in args]
        parts += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
        router.write(f">> {qualname}({', '.join(parts)})",
                     Level.DEBUG, (TRACE_TAG,), **origin)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            router.write(f"!! {qualname} raised: {type(e).__name__}: {e}",
                         Level.DEBUG, (TRACE_TAG,), **origin)
            raise

        if result is not None:
            router.write(f"<< {qualname} returned: {_short_repr(result)}",
                         Level.DEBUG, (TRACE_TAG,), **origin)
        return result

    return wrapper
