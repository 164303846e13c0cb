"""Centralised timestamp handling.

All timestamp parsing and conversion goes through this module.
Internal representation: UTC-aware ``datetime``.
Civil dates ("today") are evaluated in an explicit timezone supplied by the
host; nothing here reads the machine's local zone.
"""

from datetime import date, datetime, timezone, tzinfo


def ensure_utc_aware(dt: datetime) -> datetime:
    """Return *dt* with a timezone attached; naive values are taken as UTC."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def _from_epoch_ms(ms: float) -> datetime:
    try:
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"Epoch milliseconds out of range: {ms!r}") from exc


def parse_timestamp(ts: str | int | float | datetime | date) -> datetime:
    """Parse any timestamp representation to a timezone-aware datetime.

    Accepted inputs:
      * ``datetime`` (naive values are assumed UTC)
      * ``date`` (midnight UTC)
      * ISO 8601 string (``T`` or space separator, with or without ``Z``)
      * ``YYYY/MM/DD`` date prefix (normalised to dashes)
      * Integer or float milliseconds since epoch
      * String containing a numeric value (e.g. ``"1640995200000"``)

    Raises ``ValueError`` for empty, unparseable or out-of-range values and
    for any other input type.
    """
    if isinstance(ts, datetime):
        return ensure_utc_aware(ts)
    if isinstance(ts, date):
        return datetime(ts.year, ts.month, ts.day, tzinfo=timezone.utc)
    if isinstance(ts, bool):
        raise ValueError(f"Not a timestamp: {ts!r}")
    if isinstance(ts, (int, float)):
        return _from_epoch_ms(ts)
    if ts is not None and not isinstance(ts, str):
        raise ValueError(f"Not a timestamp: {ts!r}")

    s = (ts or "").strip()
    if not s:
        raise ValueError("Empty timestamp")

    # String that looks like a number → treat as milliseconds
    if s.replace(".", "", 1).lstrip("-").isdigit():
        return _from_epoch_ms(float(s))

    # Normalise YYYY/MM/DD → YYYY-MM-DD
    if len(s) >= 10 and s[4] == "/" and s[7] == "/":
        s = f"{s[:4]}-{s[5:7]}-{s[8:]}"

    s = s.replace("Z", "+00:00")
    s = s.replace(" ", "T", 1)

    return ensure_utc_aware(datetime.fromisoformat(s))


def civil_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of *dt* as seen in *tz* (UTC when omitted)."""
    return ensure_utc_aware(dt).astimezone(tz or timezone.utc).date()


def same_civil_date(a: datetime, b: datetime, tz: tzinfo | None = None) -> bool:
    """True when *a* and *b* fall on the same calendar day in *tz*."""
    return civil_date(a, tz) == civil_date(b, tz)


def now_utc() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)
