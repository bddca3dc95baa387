"""Obscured values: shown in debug builds, masked in release builds."""

PLACEHOLDER = '********'


class Obscured:
    """Wraps a sensitive value for interpolation into log text.

    str() gives the value itself in debug mode and PLACEHOLDER
    otherwise.  With debug=None the mode is taken from the module-level
    router when the wrapper is created.

    Usage::

        router.info(f"Token refreshed: {Obscured(token)}", 'oauth')
    """

    __slots__ = ('_text',)

    def __init__(self, value, debug: bool = None):
        if debug is None:
            from .router import get_router
            debug = get_router().debug_mode
        self._text = str(value) if debug else PLACEHOLDER

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Obscured({self._text!r})"

    def __format__(self, spec: str) -> str:
        return format(self._text, spec)
