"""
Handler bindings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .core import Signal

HandlerFunc = Callable[..., Any]


class Binding:
    """
    A single handler registration on a signal.

    Bindings are created by `Signal.add()` / `Signal.once()` and linked into
    the owning signal's handler list. Keep the returned object around to
    detach the handler later, possibly from inside the handler itself.
    """

    __slots__ = ("_handler", "_once", "_context", "_next", "_prev", "_owner")

    def __init__(
        self, handler: HandlerFunc, once: bool = False, context: Any = None
    ) -> None:
        self._handler = handler
        self._once = once
        self._context = context

        # links and owner are only touched by the owning signal
        self._next: Optional[Binding] = None
        self._prev: Optional[Binding] = None
        self._owner: Optional[Signal] = None

    @property
    def handler(self) -> HandlerFunc:
        return self._handler

    @property
    def once(self) -> bool:
        return self._once

    @property
    def context(self) -> Any:
        return self._context

    @property
    def owner(self) -> Optional[Signal]:
        """The signal this binding is attached to, or None once detached."""
        return self._owner

    def detach(self) -> bool:
        """
        Detach this binding from its owning signal.

        Returns:
            bool: True if the binding was attached, False if it was already detached.
        """
        if self._owner is None:
            return False

        self._owner.detach(self)
        return True

    def __repr__(self) -> str:
        state = "attached" if self._owner is not None else "detached"
        return f"<Binding {self._handler!r} once={self._once} {state}>"
