"""
Microsignals
------------

Tiny typed-style signals for Python: a handler registry that can be
dispatched synchronously or awaited.

Features:

- `Signal.add()` / `Signal.once()` return a `Binding`; keep it to detach later,
  even from inside the handler itself.
- Handlers run in registration order; `once` bindings are removed before they run.
- `detach_all()` clears a signal in one step; `enabled = False` mutes it.
- Optional bound `context`, passed to the handler as its first argument.
- `AsyncSignal`: handlers get a shared `done` callback; `await dispatch(...)`
  returns once it has been called.
- MIT licensed. No dependencies.
"""

from .async_signal import AsyncSignal
from .binding import Binding
from .core import Signal

__all__ = [
    "AsyncSignal",
    "Binding",
    "Signal",
]
