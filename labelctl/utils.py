import re

# e.g., "60", "20s", "5m", "1h30m", "90m", "  2m  "
DURATION_RE = re.compile(r"(?i)^\s*(?:(\d+)\s*h)?\s*(?:(\d+)\s*m)?\s*(?:(\d+)\s*s?)?\s*$")


def parse_duration_to_seconds(s: str) -> int:
    """
    Parse duration strings like '60', '20s', '5m', '1h30m'.
    A bare number is seconds. Returns total seconds (int).
    Raises ValueError on bad input or zero.
    """
    if s is None or not str(s).strip():
        raise ValueError("duration string is empty")
    m = DURATION_RE.match(str(s))
    if not m:
        raise ValueError(f"Invalid duration format: {s!r}")
    h, m_, s_ = m.groups()
    total = 0
    if h:  total += int(h) * 3600
    if m_: total += int(m_) * 60
    if s_: total += int(s_)
    if total <= 0:
        raise ValueError("duration must be > 0 seconds")
    return total


def split_names(s: str) -> list:
    """Split a comma-separated list, dropping blanks."""
    return [part.strip() for part in (s or "").split(",") if part.strip()]

