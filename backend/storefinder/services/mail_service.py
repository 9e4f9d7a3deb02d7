# 메일 발송 서비스
# - Jinja2 이메일 템플릿 렌더링 -> premailer로 CSS 인라인 -> html2text로 텍스트 버전 생성
# - smtplib로 발송 (재시도 없음, 실패 시 예외가 호출자에게 전파)

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Tuple

import html2text
from premailer import transform
from starlette.concurrency import run_in_threadpool

from ..core.config import settings
from ..core.templating import templates

logger = logging.getLogger(__name__)


def render_email(template: str, **context) -> Tuple[str, str]:
    """
    이메일 템플릿을 HTML/텍스트 두 가지로 렌더링합니다.

    Args:
        template: templates/email/ 아래 템플릿 이름 (확장자 제외)
        context: 템플릿 변수 (user, reset_url 등)

    Returns:
        (html, text)
    """
    html = templates.get_template(f"email/{template}.html").render(**context)
    inlined = transform(html)
    text = html2text.html2text(inlined)
    return inlined, text


def build_message(to_email: str, subject: str, html: str, text: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.MAIL_FROM
    msg["To"] = to_email
    msg.attach(MIMEText(text, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


def _send_email(msg: MIMEMultipart):
    server = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT)
    try:
        if settings.SMTP_TLS:
            server.starttls()
        if settings.SMTP_USER and settings.SMTP_PASSWORD:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.sendmail(settings.MAIL_FROM, [msg["To"]], msg.as_string())
    finally:
        server.quit()


async def send(user, subject: str, template: str, **context) -> None:
    html, text = render_email(template, user=user, subject=subject, **context)
    msg = build_message(user.email, subject, html, text)
    logger.info(f"[MailService] '{subject}' 메일 발송 -> {user.email}")
    # smtplib은 동기 라이브러리이므로 스레드풀에서 실행
    await run_in_threadpool(_send_email, msg)
