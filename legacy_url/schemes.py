"""Static scheme table consulted by both the parser and the serializer"""
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Scheme:
    """Parsing and serialization rules for a single URL scheme.

    Args:
        name: Lowercase scheme name, without the trailing colon
        default_port: Port elided from the host when it matches
        special: Parse an authority even when ``//`` is missing (``http:example.com``)
        opaque: Never parse an authority; ``//`` is kept as part of the path
        literal: Keep the remainder verbatim: no auto-escaping, no query/fragment split
        empty_host: An empty hostname is acceptable in strict mode
    """

    name: str = ''
    default_port: Optional[str] = None
    special: bool = False
    opaque: bool = False
    literal: bool = False
    empty_host: bool = False


SCHEMES: Dict[str, Scheme] = {
    s.name: s
    for s in [
        Scheme('file', special=True, empty_host=True),
        Scheme('ftp', '21', special=True),
        Scheme('gopher', '70', special=True),
        Scheme('http', '80', special=True),
        Scheme('https', '443', special=True),
        Scheme('ws', '80', special=True),
        Scheme('wss', '443', special=True),
        Scheme('imap', '143'),
        Scheme('ldap', '389'),
        Scheme('ldaps', '636'),
        Scheme('news', '119'),
        Scheme('nntp', '119'),
        Scheme('snews', '563'),
        Scheme('snntp', '563'),
        Scheme('telnet', '23'),
        Scheme('data', opaque=True),
        Scheme('mailto', opaque=True),
        Scheme('sms', opaque=True),
        Scheme('tel', opaque=True),
        Scheme('urn', opaque=True),
        Scheme('javascript', opaque=True, literal=True),
    ]
}
UNKNOWN_SCHEME = Scheme()


def get_scheme(protocol: Optional[str]) -> Scheme:
    """Look up a scheme by name or protocol (``'http'``, ``'HTTP:'``, etc.).

    Unknown or missing schemes get a neutral entry with no special handling.
    """
    if not protocol:
        return UNKNOWN_SCHEME
    return SCHEMES.get(protocol.lower().rstrip(':'), UNKNOWN_SCHEME)


def default_port(protocol: Optional[str]) -> Optional[str]:
    """Get the well-known port for a scheme, if it has one"""
    return get_scheme(protocol).default_port
