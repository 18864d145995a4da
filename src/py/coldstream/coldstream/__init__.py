"""Cold push-based observables with one-shot termination.

Each ``subscribe`` runs the producer again for a fresh ``Observer``; the
producer's teardown runs exactly once, even under concurrent callers.
"""

from .core import (
    Handlers,
    IObservable,
    IObserver,
    ISubscription,
    Observable,
    ObservableError,
    Observer,
    Subscription,
)

__all__ = [
    "Handlers",
    "IObservable",
    "IObserver",
    "ISubscription",
    "Observable",
    "ObservableError",
    "Observer",
    "Subscription",
]
