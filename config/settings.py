"""
Configuration. All settings from env vars or a .env file.
No YAML. No TOML parsing. Just a dataclass with env-backed defaults.
"""

import os
from dataclasses import dataclass

# Auto-load .env file so you don't need `export $(grep ...)` every time
from dotenv import load_dotenv
load_dotenv()


@dataclass
class Config:
    # ── Feed endpoint ──
    feed_url: str = os.environ.get("VLIVE_FEED_URL", "http://www.vlive.tv/home/video/more")
    page_no: int = int(os.environ.get("VLIVE_PAGE_NO", "1"))
    # Keep this above the number of videos published per poll interval.
    # If the last seen video rotates off the page, the whole page is
    # delivered as new.
    page_size: int = int(os.environ.get("VLIVE_PAGE_SIZE", "5"))
    view_type: str = os.environ.get("VLIVE_VIEW_TYPE", "recent")

    # ── Polling ──
    # Seconds between cycles. A few seconds to ~10 is recommended.
    poll_interval: float = float(os.environ.get("VLIVE_POLL_INTERVAL", "10"))
    request_timeout: float = float(os.environ.get("VLIVE_REQUEST_TIMEOUT", "15"))
    user_agent: str = os.environ.get("VLIVE_USER_AGENT", "vlive-notify/0.1")

    # ── Email delivery (optional) ──
    smtp_host: str = os.environ.get("VLIVE_SMTP_HOST", "")
    smtp_port: int = int(os.environ.get("VLIVE_SMTP_PORT", "587"))
    smtp_user: str = os.environ.get("VLIVE_SMTP_USER", "")
    smtp_pass: str = os.environ.get("VLIVE_SMTP_PASS", "")
    email_to: str = os.environ.get("VLIVE_EMAIL_TO", "")
    email_from: str = os.environ.get("VLIVE_EMAIL_FROM", "vlive-notify@localhost")


def load_config() -> Config:
    return Config()
