"""
Transport tests.

Verifies:
✔ DryRunTransport serializes endpoint, headers and payload, no network
✔ HttpTransport posts once with headers and timeout
✔ Non-2xx, timeout and connection errors return the client's own message
✔ Successful bodies go through the response interpreter
"""

from unittest.mock import MagicMock, patch

import requests

from textgen import (
    JSON_PARSE_ERROR,
    DryRunTransport,
    HttpTransport,
    Outcome,
    PreparedRequest,
)

ENDPOINT = "https://api.openai.com/v1/chat/completions"
PAYLOAD = '{"model":"gpt-4o-mini","messages":[{"role":"user","content":"hi"}]}'


# ─────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────


def make_request():
    return PreparedRequest(
        endpoint=ENDPOINT,
        payload=PAYLOAD,
        headers=["Content-Type: application/json", "Authorization: Bearer sk-test"],
    )


def make_response(text, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Server Error: Internal Server Error for url: {ENDPOINT}",
            response=response,
        )
    return response


# ─────────────────────────────────────────────────────
# PreparedRequest
# ─────────────────────────────────────────────────────


class TestPreparedRequest:
    def test_serialize(self):
        assert make_request().serialize() == (
            f"{ENDPOINT}\n"
            "Content-Type: application/json\n"
            "Authorization: Bearer sk-test\n"
            f"{PAYLOAD}"
        )

    def test_header_dict(self):
        assert make_request().header_dict() == {
            "Content-Type": "application/json",
            "Authorization": "Bearer sk-test",
        }


# ─────────────────────────────────────────────────────
# Dry run
# ─────────────────────────────────────────────────────


class TestDryRunTransport:
    def test_returns_serialized_request(self):
        with patch("requests.post") as mock_post:
            outcome = DryRunTransport().send(make_request())

        mock_post.assert_not_called()
        assert outcome.kind == "request"
        assert outcome.value == make_request().serialize()


# ─────────────────────────────────────────────────────
# HTTP
# ─────────────────────────────────────────────────────


class TestHttpTransport:
    def test_success_extracts_content(self):
        with patch("requests.post") as mock_post:
            mock_post.return_value = make_response(
                '{"choices":[{"message":{"content":"hello"}}]}'
            )
            outcome = HttpTransport(timeout_s=7).send(make_request())

        assert outcome == Outcome.text("hello")
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == ENDPOINT
        assert kwargs["data"] == PAYLOAD.encode("utf-8")
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["timeout"] == 7

    def test_uses_session_when_given(self):
        session = MagicMock()
        session.post.return_value = make_response('{"choices":[{"message":{"content":"ok"}}]}')

        with patch("requests.post") as mock_post:
            outcome = HttpTransport(session=session).send(make_request())

        mock_post.assert_not_called()
        session.post.assert_called_once()
        assert outcome.value == "ok"

    def test_http_error_passes_message_through(self):
        with patch("requests.post") as mock_post:
            mock_post.return_value = make_response("upstream failure", status_code=500)
            outcome = HttpTransport().send(make_request())

        assert outcome.is_error
        assert outcome.value == (
            f"500 Server Error: Internal Server Error for url: {ENDPOINT}"
        )

    def test_timeout(self):
        with patch("requests.post") as mock_post:
            mock_post.side_effect = requests.Timeout("Read timed out. (read timeout=10)")
            outcome = HttpTransport().send(make_request())

        assert outcome == Outcome.error("Read timed out. (read timeout=10)")

    def test_connection_error(self):
        with patch("requests.post") as mock_post:
            mock_post.side_effect = requests.ConnectionError("Name or service not known")
            outcome = HttpTransport().send(make_request())

        assert outcome == Outcome.error("Name or service not known")

    def test_single_attempt_only(self):
        with patch("requests.post") as mock_post:
            mock_post.side_effect = requests.ConnectionError("refused")
            HttpTransport().send(make_request())

        assert mock_post.call_count == 1

    def test_malformed_body(self):
        with patch("requests.post") as mock_post:
            mock_post.return_value = make_response('{"choices":[]}')
            outcome = HttpTransport().send(make_request())

        assert outcome == Outcome.error(JSON_PARSE_ERROR)

    def test_deeply_nested_body(self):
        with patch("requests.post") as mock_post:
            mock_post.return_value = make_response("[" * 100000 + "]" * 100000)
            outcome = HttpTransport().send(make_request())

        assert outcome == Outcome.error(JSON_PARSE_ERROR)
