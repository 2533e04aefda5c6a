from __future__ import annotations

import logging
import re
from urllib.parse import unquote

log = logging.getLogger(__name__)

_PARAM_REMNANT = re.compile(r";\w+;.*:")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTINUATION = re.compile(r"\n\s+")


def _percent_decode(value: str) -> str:
    """Strict percent-decoding: malformed escapes or invalid UTF-8 raise ValueError."""
    if _BAD_ESCAPE.search(value):
        raise ValueError(f"malformed escape in {value!r}")
    return unquote(value, encoding="utf-8", errors="strict")


def decode_value(value: str) -> str:
    """Clean up a raw vCard property value.

    Strips leaked ``;PARAM;...:`` remnants, applies a best-effort
    quoted-printable decode (``=XX`` treated as ``%XX``), joins folded lines
    and trims. Plain text without ``;`` or ``=`` comes back trimmed and
    otherwise unchanged.
    """
    if ";" in value:
        value = _PARAM_REMNANT.sub("", value)
        if value.startswith(";"):
            value = value[1:]

    if "=" in value:
        try:
            value = _percent_decode(value.replace("=", "%"))
        except ValueError:
            log.debug("Keeping undecoded value %r", value)

    value = value.replace("\r\n", "\n")
    value = _CONTINUATION.sub("", value)
    return value.strip()


def split_property_line(line: str) -> tuple[str, str] | None:
    """Split ``KEY;PARAMS:value`` at the first colon.

    Returns ``(KEY, value)`` with the key uppercased and any group prefix
    (``item1.``) removed, or None when the line has no colon.
    """
    idx = line.find(":")
    if idx == -1:
        return None
    key = line[:idx].upper()
    name, sep, params = key.partition(";")
    if "." in name:
        name = name.rsplit(".", 1)[1]
    return name + sep + params, line[idx + 1:].strip()


def property_matches(key: str, prefix: str) -> bool:
    return key == prefix or key.startswith(prefix + ";")


__all__ = [
    "decode_value",
    "split_property_line",
    "property_matches",
]
