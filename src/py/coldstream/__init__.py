"""Cold push-based observables with one-shot termination.

The teardown returned by a producer runs exactly once per subscription.
"""

from .coldstream import Observable, ObservableError, Observer, Subscription

__all__ = [
    "Observable",
    "ObservableError",
    "Observer",
    "Subscription",
]
