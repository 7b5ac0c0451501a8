"""Url encoding tools"""
import logging
import re
from typing import Dict, List, Mapping, Union
from urllib.parse import parse_qsl, quote

import idna

QueryDict = Dict[str, Union[str, List[str]]]

# Characters that are never left raw after the authority, even though
# browsers tolerate them in typed-in URLs
AUTO_ESCAPE_PATTERN = re.compile('[\'{}|\\\\^`<>" \r\n\t]')
COMPONENT_SAFE_CHARS = "-_.!~*'()"

logger = logging.getLogger(__name__)


def percent_encode(char, charset="utf-8"):
    """Percent-encode a single character, with uppercase hex digits"""
    return quote(char, safe="", encoding=charset)


def auto_escape(string):
    """Percent-encode characters that are unsafe to leave unescaped in a URL.

    Params:
        string : string : path, query and fragment text

    Returns:
        string : the text with unsafe characters percent-encoded

    """
    return AUTO_ESCAPE_PATTERN.sub(lambda m: percent_encode(m.group(0)), string)


def escape_chars(string, chars):
    """Percent-encode only the given characters, leaving everything else as-is.

    Existing percent-escapes are preserved, unlike ``urllib.parse.quote``.
    """
    return "".join(percent_encode(c) if c in chars else c for c in string)


def encode_component(string, charset="utf-8"):
    """Quote a query key or value the way ``encodeURIComponent`` does"""
    return quote(string, safe=COMPONENT_SAFE_CHARS, encoding=charset)


def parse_query(query: str) -> QueryDict:
    """Parse a query string into a dict.

    Params:
        query : string : query string, without the leading ``?``

    Returns:
        dict : values are strings, or lists of strings for repeated keys

    """
    params: QueryDict = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key not in params:
            params[key] = value
        elif isinstance(params[key], list):
            params[key].append(value)  # type: ignore
        else:
            params[key] = [params[key], value]  # type: ignore
    return params


def stringify_query(params: Mapping, charset: str = "utf-8") -> str:
    """Serialize a mapping into a ``key=value&...`` query string; list values repeat the key"""
    pairs = []
    for key, values in params.items():
        if not isinstance(values, (list, tuple)):
            values = [values]
        key = encode_component(str(key), charset)
        for value in values:
            value = "" if value is None else str(value)
            pairs.append(f"{key}={encode_component(value, charset)}")
    return "&".join(pairs)


def to_ascii_hostname(hostname: str) -> str:
    """Encode an internationalized hostname with IDNA.

    ASCII hostnames are returned unchanged. If the hostname can't be encoded
    (invalid code points, empty labels, etc.) it is also returned unchanged.
    """
    if hostname.isascii():
        return hostname
    try:
        return idna.encode(hostname, uts46=True).decode("ascii")
    except idna.IDNAError as e:
        logger.debug(f"Could not IDNA-encode hostname {hostname!r}: {e}")
        return hostname
