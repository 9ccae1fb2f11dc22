"""Convert timedeltas to and from strings like "5ms" or "1m30s", following Go's Duration format."""
import datetime
import decimal
import re

UNITS = {
    "h": datetime.timedelta(hours=1),
    "m": datetime.timedelta(minutes=1),
    "s": datetime.timedelta(seconds=1),
    "ms": datetime.timedelta(milliseconds=1),
    "us": datetime.timedelta(microseconds=1),
}

# longest unit names first, so "ms" isn't read as "m" followed by garbage
PART_MATCHER = re.compile(r"(\d+(?:\.\d*)?)(ms|us|h|m|s)")


def parse_duration(val: str) -> datetime.timedelta:
    sign = 1
    if val[:1] in ("-", "+"):
        sign = -1 if val[0] == "-" else 1
        val = val[1:]
    if not val:
        raise ValueError("Empty duration string")
    if val == "0":
        return datetime.timedelta()

    accum = datetime.timedelta()
    pos = 0
    while pos < len(val):
        match = PART_MATCHER.match(val, pos)
        if match is None:
            raise ValueError(f"Invalid duration string {val!r} at position {pos}")
        number, unit = decimal.Decimal(match[1]), UNITS[match[2]]
        whole, fraction = divmod(number, 1)
        accum += int(whole) * unit
        if fraction:
            num, denom = fraction.as_integer_ratio()
            accum += num * unit / denom
        pos = match.end()
    return sign * accum


def format_duration(val: datetime.timedelta) -> str:
    if val == datetime.timedelta():
        return "0"
    if val < datetime.timedelta():
        return "-" + format_duration(-val)
    # below a second, use a single (possibly fractional) unit
    if val < UNITS["ms"]:
        return f"{val.microseconds}us"
    if val < UNITS["s"]:
        milliseconds = val / UNITS["ms"]
        return f"{int(milliseconds) if milliseconds.is_integer() else milliseconds}ms"

    parts = []
    hours, val = divmod(val, UNITS["h"])
    if hours:
        parts.append(f"{hours}h")
    minutes, val = divmod(val, UNITS["m"])
    if minutes:
        parts.append(f"{minutes}m")
    if val:
        seconds = val.total_seconds()
        parts.append(f"{int(seconds) if seconds.is_integer() else seconds}s")
    return "".join(parts)
