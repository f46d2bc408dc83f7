"""
utils/share.py - Share-link encoding for garden layouts.

A share link carries the export payload in one query parameter:
JSON -> URI component encoding -> base64. The URI step keeps non-ASCII
garden names intact and matches what browsers produce with
btoa(encodeURIComponent(json)), so links made by either side decode here.
"""

import base64
import binascii
import json
from typing import Optional, Dict, Any
from urllib.parse import quote, unquote, urlencode, urlsplit

from models import Garden
from utils.snapshots import build_export_payload, parse_garden_payload

SHARE_PARAM = 'garden'

# Characters encodeURIComponent leaves alone besides letters, digits and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_garden(garden: Garden) -> str:
    """Encode a garden into the share token."""
    text = json.dumps(build_export_payload(garden), ensure_ascii=False, separators=(',', ':'))
    uri_encoded = quote(text, safe=_URI_COMPONENT_SAFE)
    return base64.b64encode(uri_encoded.encode('ascii')).decode('ascii')


def decode_garden(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode a share token back into garden fields.

    Returns:
        The parse_garden_payload dict, or None if the token is corrupt.
    """
    if not token:
        return None
    try:
        raw = base64.b64decode(token.encode('ascii'), validate=True).decode('ascii')
        data = json.loads(unquote(raw))
    except (binascii.Error, UnicodeError, ValueError):
        return None
    return parse_garden_payload(data)


def build_share_url(base_url: str, garden: Garden) -> str:
    """Append the share parameter to *base_url*."""
    separator = '&' if '?' in base_url else '?'
    return f"{base_url}{separator}{urlencode({SHARE_PARAM: encode_garden(garden)})}"


def extract_share_token(url_or_token: str) -> str:
    """
    Accept either a full share URL or a bare token.

    Values are only percent-decoded: a raw "+" from a browser-built link
    is part of the base64 token, not a space.
    """
    if '?' not in url_or_token:
        return url_or_token
    for pair in urlsplit(url_or_token).query.split('&'):
        key, _, value = pair.partition('=')
        if unquote(key) == SHARE_PARAM:
            return unquote(value)
    return ''
