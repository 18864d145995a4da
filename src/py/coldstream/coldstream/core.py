import threading
import types
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypedDict, TypeVar
from typing_extensions import override
import logging

T = TypeVar("T")

Teardown = Callable[[], None]


class ObservableError(Exception):
    """Signals a producer that broke the observable contract."""


class Handlers(TypedDict, total=False):
    next: Callable[[Any], None]
    error: Callable[[object], None]
    complete: Callable[[], None]


HANDLER_NAMES = frozenset(Handlers.__optional_keys__)


class IObserver(Generic[T]):
    def next(self, value: T) -> None:
        """
        Push a value to the subscriber.
        """
        raise NotImplementedError

    def error(self, error: object) -> None:
        """
        Terminate the stream with an error.
        """
        raise NotImplementedError

    def complete(self) -> None:
        """
        Terminate the stream successfully.
        """
        raise NotImplementedError


class ISubscription:
    def unsubscribe(self) -> None:
        """
        Stop delivery and run the teardown, at most once.
        """
        raise NotImplementedError


class IObservable(Generic[T]):
    def subscribe(
        self, handlers: Optional[Handlers] = None, **callbacks: Callable[..., None]
    ) -> ISubscription:
        """
        Run the producer for a new subscriber.
        """
        raise NotImplementedError


class Observer(IObserver[T], ISubscription, Generic[T]):
    """
    Routes signals from one producer run to one set of handlers.

    Any missing handler silently drops its signal. After ``error``,
    ``complete`` or ``unsubscribe`` every later signal is dropped and the
    teardown has run (or runs as soon as it is stored).
    """

    def __init__(self, handlers: Optional[Mapping[str, Any]] = None) -> None:
        own = dict(handlers or {})
        unknown = set(own) - HANDLER_NAMES
        if unknown:
            raise TypeError(
                f"Unknown observer handler(s): {', '.join(sorted(unknown))}; "
                f"expected any of: {', '.join(sorted(HANDLER_NAMES))}"
            )
        self.handlers: Mapping[str, Any] = types.MappingProxyType(own)
        # Guards state only; handlers and teardowns run with it released.
        self._lock = threading.Lock()
        self._terminated = False
        self._teardown: Optional[Teardown] = None

    @property
    def terminated(self) -> bool:
        return self._terminated

    @override
    def next(self, value: T) -> None:
        with self._lock:
            if self._terminated:
                logging.getLogger(__name__).debug(
                    "Dropped next signal after termination."
                )
                return
            handler = self.handlers.get("next")
        if handler is not None:
            handler(value)

    @override
    def error(self, error: object) -> None:
        if not self._terminate():
            logging.getLogger(__name__).debug(
                "Dropped error signal after termination: %r", error
            )
            return
        try:
            handler = self.handlers.get("error")
            if handler is not None:
                handler(error)
        finally:
            self._dispose()

    @override
    def complete(self) -> None:
        if not self._terminate():
            logging.getLogger(__name__).debug(
                "Dropped complete signal after termination."
            )
            return
        try:
            handler = self.handlers.get("complete")
            if handler is not None:
                handler()
        finally:
            self._dispose()

    @override
    def unsubscribe(self) -> None:
        self._terminate()
        self._dispose()

    def _terminate(self) -> bool:
        """
        Mark the stream terminated. Returns False if it already was.
        """
        with self._lock:
            if self._terminated:
                return False
            self._terminated = True
            return True

    def _set_teardown(self, teardown: Optional[Teardown]) -> None:
        """
        Store the producer's teardown. Called once, right after the producer
        returns; runs it immediately if the stream already terminated.
        """
        with self._lock:
            self._teardown = teardown
            terminated = self._terminated
        if terminated:
            self._dispose()

    def _dispose(self) -> None:
        """
        Take the teardown out of its slot and run it. Only the caller that
        takes it runs it.
        """
        with self._lock:
            teardown, self._teardown = self._teardown, None
        if teardown is not None:
            teardown()


class Subscription(ISubscription):
    def __init__(self, observer: Observer[Any]) -> None:
        self._observer = observer

    @override
    def unsubscribe(self) -> None:
        self._observer.unsubscribe()


class Observable(IObservable[T], Generic[T]):
    """
    Cold stream: the producer runs again, in full, for every subscription.
    """

    def __init__(self, producer: Callable[[Observer[T]], Optional[Teardown]]) -> None:
        self._producer = producer

    @staticmethod
    def from_iterable(values: Iterable[T]) -> "Observable[T]":
        """
        Create an observable that pushes ``values`` in order, then completes.

        The values are captured up front so every subscriber sees the same
        sequence, even when ``values`` is a one-shot iterator.
        """
        items = tuple(values)

        def producer(observer: Observer[T]) -> Teardown:
            for value in items:
                observer.next(value)
            observer.complete()

            def teardown() -> None:
                logging.getLogger(__name__).debug("unsubscribed")

            return teardown

        return Observable(producer)

    from_ = from_iterable

    @override
    def subscribe(
        self, handlers: Optional[Handlers] = None, **callbacks: Callable[..., None]
    ) -> Subscription:
        """
        Subscribe with a ``Handlers`` mapping, keyword callbacks, or both.
        Keyword callbacks take precedence.
        """
        observer: Observer[T] = Observer({**(handlers or {}), **callbacks})
        teardown = self._producer(observer)
        if teardown is not None and not callable(teardown):
            observer.unsubscribe()
            logging.getLogger(__name__).error(
                "Producer returned a non-callable teardown: %r", teardown
            )
            raise ObservableError(
                f"Producer must return a callable teardown or None, got {type(teardown).__name__}"
            )
        observer._set_teardown(teardown)
        return Subscription(observer)
