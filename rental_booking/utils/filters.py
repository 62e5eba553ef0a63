"""Date formatting helpers shared by the email templates."""
from datetime import datetime, date, timezone
import pytz

DEFAULT_TZ = "Asia/Dubai"


def fmt_date(value) -> str:
    """Render a date (or ISO date string) like 'Mon Jun 01 2026'."""
    if value is None:
        return ""
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return ""
        try:
            value = date.fromisoformat(s.split("T", 1)[0])
        except ValueError:
            # Could not parse, show original
            return s
    return value.strftime("%a %b %d %Y")


def fmt_iso_local(value, tz_name: str = DEFAULT_TZ, use_12h: bool = False) -> str:
    """
    Format an ISO timestamp into the business's local time.
    Supports:
      - 'YYYY-MM-DD HH:MM:SS'
      - 'YYYY-MM-DDTHH:MM:SS'
      - Above with 'Z' or timezone offsets like '+00:00'
    Naive values are taken as UTC. On parse error, returns the original value.
    """
    if value is None:
        return ""

    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value).strip()
        if not s:
            return ""
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return str(value)

    # If naive datetime, assume UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    try:
        local = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        local = pytz.utc
    dt_local = dt.astimezone(local)

    if use_12h:
        # Avoid %-I (not portable on Windows). Strip any leading zero manually.
        hh = dt_local.strftime("%I").lstrip("0") or "0"
        return f"{dt_local.strftime('%d %b %Y')}, {hh}:{dt_local.strftime('%M %p')}"
    return dt_local.strftime("%d/%m/%Y %H:%M")


def phone_digits(value) -> str:
    """Keep only the digits of a phone number (for wa.me links)."""
    return "".join(ch for ch in str(value or "") if ch.isdigit())
