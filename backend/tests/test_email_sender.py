from unittest.mock import MagicMock, patch

import requests

from backend.app.core.config import Settings
from backend.services import email_sender


def _settings(**overrides) -> Settings:
    values = {"SENDGRID_API_KEY": "SG.test-key", "SENDGRID_FROM_EMAIL": "noreply@pharmacie.sn"}
    values.update(overrides)
    return Settings(**values)


def test_without_api_key_nothing_is_sent():
    with patch.object(email_sender.requests, "post") as post:
        ok = email_sender.send_email("f@test.sn", "Sujet", "<p>x</p>", settings=_settings(SENDGRID_API_KEY=None))

    assert ok is False
    post.assert_not_called()


def test_accepted_message():
    with patch.object(email_sender.requests, "post", return_value=MagicMock(status_code=202, text="")) as post:
        ok = email_sender.send_email("f@test.sn", "Sujet", "<p>x</p>", settings=_settings())

    assert ok is True
    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "https://api.sendgrid.com/v3/mail/send"
    assert kwargs["headers"]["Authorization"] == "Bearer SG.test-key"
    assert kwargs["timeout"] == 10

    payload = kwargs["json"]
    assert payload["personalizations"] == [{"to": [{"email": "f@test.sn"}]}]
    assert payload["from"] == {"email": "noreply@pharmacie.sn", "name": "Pharmacie Centrale"}
    assert payload["subject"] == "Sujet"
    assert payload["content"] == [{"type": "text/html", "value": "<p>x</p>"}]


def test_rejected_message():
    response = MagicMock(status_code=401, text='{"errors": []}')
    with patch.object(email_sender.requests, "post", return_value=response):
        assert email_sender.send_email("f@test.sn", "Sujet", "<p>x</p>", settings=_settings()) is False


def test_network_error_is_not_raised():
    with patch.object(email_sender.requests, "post", side_effect=requests.ConnectionError("down")):
        assert email_sender.send_email("f@test.sn", "Sujet", "<p>x</p>", settings=_settings()) is False
