import logging
import pytest

from coldstream.coldstream import mock_requests
from coldstream.coldstream.mock_requests import (
    HTTP_GET_METHOD,
    HTTP_POST_METHOD,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_OK,
    REQUESTS_MOCK,
    handle_error,
    handle_request,
)


def test_requests_mock_shape() -> None:
    post, get = REQUESTS_MOCK

    assert post.method == HTTP_POST_METHOD
    assert post.body is not None and post.body.roles == ("user", "admin")
    assert get.method == HTTP_GET_METHOD
    assert get.params == {"id": "3f5h67s4s"}


def test_handlers_map_to_statuses() -> None:
    assert handle_request(REQUESTS_MOCK[0]).status == HTTP_STATUS_OK
    assert handle_error("boom").status == HTTP_STATUS_INTERNAL_SERVER_ERROR


def test_main_handles_every_request(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=mock_requests.__name__)

    assert mock_requests.main() == [HTTP_STATUS_OK, HTTP_STATUS_OK]
    assert [r.getMessage() for r in caplog.records][-1] == "complete"
