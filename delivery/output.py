"""
Output delivery. CLI (stdout) and email.

Both are ready-made callbacks for the Notifier. CLI is the primary
interface. Email is optional and one message per record.
"""

import logging
import smtplib
from email.mime.text import MIMEText

from config.settings import Config
from models import Record

log = logging.getLogger(__name__)

VLIVE_BASE = "https://www.vlive.tv"


def record_url(record: Record) -> str:
    if record.item_id.startswith("http"):
        return record.item_id
    return f"{VLIVE_BASE}{record.item_id}"


def format_record(record: Record) -> str:
    kind = "LIVE" if record.is_live else "VOD"
    return f"[{kind}] {record.group_name}: {record.title} ({record.item_sequence}) {record_url(record)}"


def deliver_cli(record: Record):
    """Print to stdout. That's it."""
    print(format_record(record), flush=True)


class EmailSink:
    """Sends one plain-text email per new record via SMTP."""

    def __init__(self, config: Config):
        self._config = config

    def on_new(self, record: Record) -> bool:
        return deliver_email(record, self._config)


def deliver_email(record: Record, config: Config) -> bool:
    """Send via SMTP. Returns True on success."""
    if not config.smtp_host or not config.email_to:
        log.warning("Email not configured (VLIVE_SMTP_HOST, VLIVE_EMAIL_TO)")
        return False

    kind = "live" if record.is_live else "new video"
    subject = f"[vlive] {record.group_name} {kind}: {record.title[:60]}"
    lines = [
        record.title,
        "",
        f"Channel: {record.group_name} ({record.group_kind.name.lower()})",
        f"Link: {record_url(record)}",
    ]
    if record.thumbnail:
        lines.append(f"Thumbnail: {record.thumbnail}")

    msg = MIMEText("\n".join(lines), "plain", "utf-8")
    msg["Subject"] = subject
    msg["From"] = config.email_from
    msg["To"] = config.email_to

    try:
        with smtplib.SMTP(config.smtp_host, config.smtp_port) as server:
            server.starttls()
            if config.smtp_user:
                server.login(config.smtp_user, config.smtp_pass)
            server.send_message(msg)
        log.info(f"Email sent: {subject}")
        return True
    except (smtplib.SMTPException, OSError) as e:
        log.error(f"Email delivery failed: {e}")
        return False
