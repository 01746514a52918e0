from datetime import datetime, timezone

import bleach

ALLOWED_TAGS = ["p", "br", "strong", "em", "u", "ul", "ol", "li", "a", "code", "pre", "h3", "h4", "blockquote"]
ALLOWED_ATTRIBUTES = {"a": ["href", "title", "target"]}


def utcnow():
    """Current UTC time as a naive datetime, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value):
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def format_datetime(datetime_obj):
    """Format a stored (naive UTC) datetime as an ISO-8601 string."""
    if not datetime_obj:
        return None
    return datetime_obj.replace(microsecond=0).isoformat() + "Z"


def sanitize_html(value):
    if value is None:
        return None
    return bleach.clean(value, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)
