"""
microsignals.core
-----------------

Synchronous signal: an intrusive, insertion-ordered list of bindings.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .binding import Binding, HandlerFunc

logger = logging.getLogger(__name__)


class Signal:
    """
    A dispatcher that binds handlers and calls them in registration order.

    Not thread-safe: a signal is meant to be used from a single thread of control.
    """

    def __init__(self) -> None:
        self._head: Optional[Binding] = None
        self._tail: Optional[Binding] = None
        self.enabled = True

    # -------------------- registration API --------------------
    def add(self, handler: HandlerFunc, context: Any = None) -> Binding:
        """
        Bind a handler that is called on every dispatch.

        Args:
            handler (HandlerFunc): The handler to bind.
            context (Any, optional): Value passed to the handler as its first
                                     argument. Defaults to None (not passed).

        Returns:
            Binding: The new binding, usable to detach the handler.
        """
        return self._add_binding(Binding(handler, False, context))

    def once(self, handler: HandlerFunc, context: Any = None) -> Binding:
        """
        Bind a handler that is called on the next dispatch only.

        The binding is detached right before the handler runs.

        Args:
            handler (HandlerFunc): The handler to bind.
            context (Any, optional): Value passed to the handler as its first
                                     argument. Defaults to None (not passed).

        Returns:
            Binding: The new binding.
        """
        return self._add_binding(Binding(handler, True, context))

    def receiver(
        self, *, once: bool = False, context: Any = None
    ) -> Callable[[HandlerFunc], HandlerFunc]:
        """
        Decorator to bind a function to this signal.

        Example:
        changed = Signal()

        @changed.receiver()
        def on_changed(value):
            print("changed to", value)
        """

        def wrapper(func: HandlerFunc) -> HandlerFunc:
            if once:
                self.once(func, context)
            else:
                self.add(func, context)
            return func

        return wrapper

    def detach(self, binding: Binding) -> Signal:
        """
        Detach a binding so that it is no longer called.
        Bindings owned by another signal, or already detached, are ignored.

        Returns:
            Signal: This signal, for chaining.
        """
        if binding._owner is not self:
            return self

        if binding._prev is not None:
            binding._prev._next = binding._next

        if binding._next is not None:
            binding._next._prev = binding._prev

        if binding is self._head:
            self._head = binding._next
            if binding._next is None:
                self._tail = None
        elif binding is self._tail:
            self._tail = binding._prev
            if self._tail is not None:
                self._tail._next = None

        # binding._next is kept so a dispatch standing on it can move on
        binding._prev = None
        binding._owner = None
        return self

    def detach_all(self) -> Signal:
        """Detach every binding."""
        node = self._head
        if node is None:
            return self

        self._head = None
        self._tail = None

        count = 0
        while node is not None:
            node._owner = None
            node = node._next
            count += 1

        logger.debug("Detached %d bindings from %r", count, self)
        return self

    # -------------------- queries --------------------
    def handlers(self) -> List[Binding]:
        """Return a snapshot of the attached bindings, in dispatch order."""
        out: List[Binding] = []
        node = self._head
        while node is not None:
            out.append(node)
            node = node._next
        return out

    def has_any(self) -> bool:
        """Return True if any handler is bound."""
        return self._head is not None

    def has(self, binding: Binding) -> bool:
        """Return True if `binding` is attached to this signal."""
        return binding._owner is self

    def __contains__(self, binding: object) -> bool:
        return isinstance(binding, Binding) and self.has(binding)

    # -------------------- dispatch --------------------
    def dispatch(self, *args: Any, **kwargs: Any) -> None:
        """
        Call every bound handler with the given arguments, in binding order.
        Does nothing while `enabled` is False.
        Exceptions raised by handlers propagate and stop the dispatch.

        Args:
            *args: Positional arguments to pass to the handlers.
            **kwargs: Keyword arguments to pass to the handlers.

        Returns:
            None
        """
        if not self.enabled:
            return

        node = self._head
        while node is not None:
            if node._once:
                self.detach(node)

            self._invoke(node, args, kwargs)

            # read after the call: the handler may have detached what came next
            node = node._next

    def _invoke(self, binding: Binding, args: tuple, kwargs: dict) -> Any:
        if binding._context is None:
            return binding._handler(*args, **kwargs)
        return binding._handler(binding._context, *args, **kwargs)

    def _add_binding(self, binding: Binding) -> Binding:
        if not callable(binding.handler):
            raise TypeError("handler must be callable")

        if self._tail is None:
            self._head = binding
            self._tail = binding
        else:
            self._tail._next = binding
            binding._prev = self._tail
            self._tail = binding

        binding._owner = self
        return binding
