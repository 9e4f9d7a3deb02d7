# 메일 렌더링/메시지 구성 검증 (SMTP 발송은 모킹)
import asyncio
from types import SimpleNamespace
from unittest.mock import patch

from storefinder.services import mail_service

RESET_URL = "http://test/account/reset/abc123"


def test_render_email_inlines_css_and_builds_text():
    user = SimpleNamespace(name="Alice", email="alice@example.com")
    html, text = mail_service.render_email("password_reset", user=user, reset_url=RESET_URL)
    assert "<style" not in html
    assert "#fff200" in html
    assert "Hello Alice" in html
    assert RESET_URL in text
    assert "<p>" not in text


def test_build_message_has_text_and_html_parts():
    msg = mail_service.build_message("alice@example.com", "Password Reset", "<p>hi</p>", "hi")
    assert msg["To"] == "alice@example.com"
    assert msg["Subject"] == "Password Reset"
    parts = [part.get_content_type() for part in msg.get_payload()]
    assert parts == ["text/plain", "text/html"]


@patch("storefinder.services.mail_service._send_email")
def test_send_hands_message_to_smtp(mock_send):
    user = SimpleNamespace(name="Alice", email="alice@example.com")
    asyncio.run(mail_service.send(user, "Password Reset", "password_reset", reset_url=RESET_URL))
    msg = mock_send.call_args.args[0]
    assert msg["To"] == "alice@example.com"
    assert msg["Subject"] == "Password Reset"
