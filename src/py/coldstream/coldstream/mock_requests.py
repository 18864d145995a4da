"""Mock HTTP request pipeline built on a cold observable.

Run with ``python -m coldstream.coldstream.mock_requests``.
"""

import datetime
import logging
from dataclasses import dataclass, field
from typing import Optional

from .core import Observable

HTTP_POST_METHOD = "POST"
HTTP_GET_METHOD = "GET"

HTTP_STATUS_OK = 200
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500


@dataclass(frozen=True)
class User:
    name: str
    age: int
    roles: tuple[str, ...]
    created_at: datetime.datetime
    is_deleted: bool = False


@dataclass(frozen=True)
class MockRequest:
    method: str
    host: str
    path: str
    body: Optional[User] = None
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestStatus:
    status: int


USER_MOCK = User(
    name="User Name",
    age=26,
    roles=("user", "admin"),
    created_at=datetime.datetime.now(datetime.timezone.utc),
)

REQUESTS_MOCK: tuple[MockRequest, ...] = (
    MockRequest(
        method=HTTP_POST_METHOD,
        host="service.example",
        path="user",
        body=USER_MOCK,
    ),
    MockRequest(
        method=HTTP_GET_METHOD,
        host="service.example",
        path="user",
        params={"id": "3f5h67s4s"},
    ),
)


def handle_request(request: MockRequest) -> RequestStatus:
    logging.getLogger(__name__).info(
        "%s %s/%s", request.method, request.host, request.path
    )
    return RequestStatus(HTTP_STATUS_OK)


def handle_error(error: object) -> RequestStatus:
    logging.getLogger(__name__).error("Request stream failed: %r", error)
    return RequestStatus(HTTP_STATUS_INTERNAL_SERVER_ERROR)


def handle_complete() -> None:
    logging.getLogger(__name__).info("complete")


def main() -> list[int]:
    statuses: list[int] = []
    requests = Observable.from_iterable(REQUESTS_MOCK)

    subscription = requests.subscribe(
        next=lambda request: statuses.append(handle_request(request).status),
        error=lambda error: statuses.append(handle_error(error).status),
        complete=handle_complete,
    )
    subscription.unsubscribe()
    return statuses


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    print(main())
