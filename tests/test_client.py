from unittest import mock

import requests

from filmorate_client import FilmorateClient


def _response(status_code, json_body=None, text=""):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.content = b"" if json_body is None and not text else b"x"
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


def _client(response):
    session = mock.Mock(spec=requests.Session)
    session.request.return_value = response
    return FilmorateClient(base_url="http://localhost:8080/", session=session, timeout=5), session


def test_create_user_posts_payload():
    client, session = _client(_response(201, {"id": 1, "login": "dolore"}))
    data, error = client.create_user({"login": "dolore"})
    assert error is None
    assert data["id"] == 1
    session.request.assert_called_once_with(
        method="POST",
        url="http://localhost:8080/users",
        params=None,
        json={"login": "dolore"},
        timeout=5,
    )


def test_popular_films_sends_count():
    client, session = _client(_response(200, [{"id": 2}]))
    films, error = client.get_popular_films(count=3)
    assert films == [{"id": 2}]
    assert error is None
    assert session.request.call_args.kwargs["params"] == {"count": 3}


def test_no_content_route_reports_success():
    client, session = _client(_response(204))
    ok, error = client.add_friend(1, 2)
    assert ok is True
    assert error is None
    assert session.request.call_args.kwargs["url"] == "http://localhost:8080/users/1/friends/2"


def test_http_error_uses_error_message():
    body = {"error": "Объект не найден", "errorMessage": "Пользователь с id 9 не найден."}
    client, _ = _client(_response(404, body))
    data, error = client.get_user(9)
    assert data is None
    assert error == {"status_code": 404, "message": "Пользователь с id 9 не найден."}


def test_http_error_without_json_falls_back_to_text():
    client, _ = _client(_response(500, text="Internal Server Error"))
    films, error = client.list_films()
    assert films == []
    assert error == {"status_code": 500, "message": "Internal Server Error"}


def test_connection_error():
    session = mock.Mock(spec=requests.Session)
    session.request.side_effect = requests.ConnectionError("refused")
    client = FilmorateClient(base_url="http://localhost:8080", session=session)
    ok, error = client.remove_like(1, 2)
    assert ok is False
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_get_likes_returns_user_ids():
    client, session = _client(_response(200, [1, 3]))
    likes, error = client.get_likes(7)
    assert likes == [1, 3]
    assert error is None
    assert session.request.call_args.kwargs["url"] == "http://localhost:8080/films/7/likes"
