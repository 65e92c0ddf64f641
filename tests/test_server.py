import pytest
from flask import Flask
from flask.testing import FlaskClient

from calculation.errors import ErrorKind
from server import ERROR_MESSAGES, GENERIC_ERROR_MESSAGE, Config, create_app, error_message, main


@pytest.fixture
def client() -> FlaskClient:
    app = create_app(Config())
    app.config["TESTING"] = True
    return app.test_client()


@pytest.mark.parametrize(
    "body, expected_status, expected_response",
    [
        pytest.param({"expression": "2 + 2"}, 200, {"result": "4"}, id="valid expression"),
        pytest.param({"expression": "7 / 2"}, 200, {"result": "3.5"}, id="fractional result"),
        pytest.param({"expression": "2 / 0"}, 422, {"error": "Division by zero"}, id="division by zero"),
        pytest.param({"expression": "(2 + 3"}, 422, {"error": "Mismatched parentheses"}, id="unclosed bracket"),
        pytest.param({"expression": "2 3"}, 422, {"error": "Error calculation"}, id="invalid expression"),
        pytest.param({"expression": "2*(2+2{)"}, 422, {"error": "Unexpected token"}, id="curly bracket"),
        pytest.param({"expression": "   "}, 422, {"error": "Empty input"}, id="blank expression"),
        pytest.param({"expression": ""}, 400, {"error": "Invalid Body"}, id="empty expression"),
        pytest.param({"expr": "2 + 2"}, 400, {"error": "Invalid Body"}, id="missing expression"),
        pytest.param({"expression": 4}, 400, {"error": "Invalid Body"}, id="expression not a string"),
        pytest.param(["2 + 2"], 400, {"error": "Invalid Body"}, id="body not an object"),
    ],
)
def test_calculate(client: FlaskClient, body, expected_status: int, expected_response: dict) -> None:
    response = client.post("/api/v1/calculate", json=body)
    assert response.status_code == expected_status
    assert response.get_json() == expected_response


def test_calculate_unparseable_body(client: FlaskClient) -> None:
    response = client.post("/api/v1/calculate", data="invalid body")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid Body"}


def test_calculate_without_json_content_type(client: FlaskClient) -> None:
    response = client.post("/api/v1/calculate", data='{"expression": "2 * 3"}', content_type="text/plain")
    assert response.status_code == 200
    assert response.get_json() == {"result": "6"}


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "OPTIONS"])
def test_wrong_method(client: FlaskClient, method: str) -> None:
    response = client.open("/api/v1/calculate", method=method)
    assert response.status_code == 405
    assert response.get_json() == {"error": "Wrong Method"}


def test_wrong_path(client: FlaskClient) -> None:
    response = client.post("/wrong/path", json={"expression": "2 + 2"})
    assert response.status_code == 404
    assert response.get_json() == {"error": "Not Found"}


def test_every_error_kind_has_a_message() -> None:
    assert set(ERROR_MESSAGES) == set(ErrorKind)
    assert error_message(ErrorKind.DIVISION_BY_ZERO) == "Division by zero"


def test_unknown_error_kind_gets_generic_message() -> None:
    assert error_message("SOMETHING_NEW") == GENERIC_ERROR_MESSAGE  # type: ignore


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("HOST", raising=False)
    assert Config.from_env() == Config(port="8080", host="0.0.0.0")

    monkeypatch.setenv("PORT", "9090")
    assert Config.from_env().port == "9090"


def test_main_serves_with_app_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("HOST", "127.0.0.1")
    calls = []
    monkeypatch.setattr(Flask, "run", lambda self, **kwargs: calls.append((self.config["CALCULATOR"], kwargs)))

    main()

    assert calls == [(Config(port="9090", host="127.0.0.1"), {"host": "127.0.0.1", "port": 9090, "debug": False})]


def test_create_app_keeps_given_config() -> None:
    config = Config(port="1234", host="localhost")
    assert create_app(config).config["CALCULATOR"] is config
