#!/usr/bin/env python3
"""
YouTube Channel Resolver
Turns a user-supplied channel reference into a typed identifier

Supported inputs:
- https://youtube.com/channel/UCxxxxxxxx
- https://youtube.com/@handle
- https://youtube.com/c/customname
- https://youtube.com/user/legacyname
- @handle
- UCxxxxxxxxxxxxxxxxxxxxxx (24-character channel ID)

Usage:
    python3 -m tools.youtube_channel_resolver "https://youtube.com/@channelname"
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Optional
from urllib.parse import SplitResult, urlsplit

KIND_ID = "id"
KIND_HANDLE = "handle"
KIND_USERNAME = "username"

CHANNEL_ID_LENGTH = 24

# RFC 3986 scheme followed by ':'
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass(frozen=True)
class ChannelIdentifier:
    kind: str
    value: str

    def to_dict(self) -> dict:
        return {"kind": self.kind, "value": self.value}


def _parse_absolute_url(raw: str) -> Optional[SplitResult]:
    if not _SCHEME_PATTERN.match(raw):
        return None
    try:
        return urlsplit(raw)
    except ValueError:
        return None


def _path_segment(path: str, index: int) -> Optional[str]:
    segments = path.split("/")
    if index >= len(segments) or not segments[index]:
        return None
    return segments[index]


def _from_url(parts: SplitResult) -> Optional[ChannelIdentifier]:
    host = parts.hostname or ""
    if "youtube.com" not in host:
        return None

    path = parts.path
    if path.startswith("/channel/"):
        value = _path_segment(path, 2)
        return ChannelIdentifier(KIND_ID, value) if value else None

    if path.startswith("/@"):
        value = _path_segment(path, 1)
        return ChannelIdentifier(KIND_HANDLE, value) if value else None

    if path.startswith("/c/") or path.startswith("/user/"):
        value = _path_segment(path, 2)
        return ChannelIdentifier(KIND_USERNAME, value) if value else None

    return None


def resolve_channel_identifier(raw: str) -> Optional[ChannelIdentifier]:
    """
    Classify a channel reference without touching the network.

    Returns None for anything that cannot be classified. The input is used
    verbatim: no trimming and no case folding.
    """
    if not isinstance(raw, str) or not raw:
        return None

    parts = _parse_absolute_url(raw)
    if parts is not None:
        return _from_url(parts)

    if raw.startswith("@"):
        return ChannelIdentifier(KIND_HANDLE, raw)

    if raw.startswith("UC") and len(raw) == CHANNEL_ID_LENGTH:
        return ChannelIdentifier(KIND_ID, raw)

    return None


def main():
    if len(sys.argv) != 2:
        print("❌ Error: Missing channel reference")
        print("\nUsage:")
        print("  python3 -m tools.youtube_channel_resolver \"CHANNEL_URL_OR_HANDLE\"")
        sys.exit(1)

    identifier = resolve_channel_identifier(sys.argv[1])
    if identifier is None:
        print(f"❌ Could not classify: {sys.argv[1]}")
        sys.exit(1)

    print(f"✅ {identifier.kind}: {identifier.value}")


if __name__ == "__main__":
    main()
