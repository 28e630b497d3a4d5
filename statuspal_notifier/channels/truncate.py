"""
Byte-length truncation for text fields sent to remote APIs.

Limits are measured in UTF-8 bytes. A cut never splits a code point and the
result ends with a single ellipsis character so readers can tell the text was
shortened.
"""

TRUNCATION_MARKER = "…"
_MARKER_BYTES = TRUNCATION_MARKER.encode("utf-8")


def truncate_bytes(text: str, limit: int) -> tuple[str, bool]:
    """
    Shorten *text* to at most *limit* UTF-8 bytes.

    Returns ``(text, truncated)``. Text already within the limit comes back
    unchanged, which makes the function idempotent.
    """
    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text, False

    # no room for the marker: plain cut
    if limit <= len(_MARKER_BYTES):
        return encoded[:limit].decode("utf-8", errors="ignore"), True

    head = encoded[: limit - len(_MARKER_BYTES)].decode("utf-8", errors="ignore")
    return head + TRUNCATION_MARKER, True
