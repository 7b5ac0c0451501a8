"""legacy-url main module"""
import re
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from . import tools
from .schemes import Scheme, default_port, get_scheme

Query = Union[str, tools.QueryDict, None]
URLLike = Union['URL', Mapping[str, Any]]

SCHEME_PATTERN = re.compile(r'([a-zA-Z][a-zA-Z0-9+.-]*):')
PORT_PATTERN = re.compile(r'[0-9]+')
TRAILING_PORT_PATTERN = re.compile(r':[0-9]+\Z')
HOST_ENDING_CHARS = '/?#'
HOSTNAME_MAX_LEN = 255
DEFAULT_CHARSET = 'utf-8'


@dataclass(frozen=True)
class URL:
    """A parsed URL. Absent components are ``None``; ``href`` is the canonical serialization."""

    protocol: Optional[str] = None
    slashes: bool = True
    auth: Optional[str] = None
    host: Optional[str] = None
    port: Optional[str] = None
    hostname: Optional[str] = None
    hash: Optional[str] = None
    search: Optional[str] = None
    query: Query = None
    pathname: Optional[str] = None
    path: Optional[str] = None
    href: Optional[str] = None

    @classmethod
    def from_string(cls, url: str, parse_query: bool = False) -> 'URL':
        """Parse a URL string into its components"""
        return parse(url, parse_query)

    def to_string(self) -> str:
        """Recombine URL components into a string"""
        return format(self)

    @property
    def scheme(self) -> Optional[str]:
        return self.protocol[:-1] if self.protocol else None

    @property
    def username(self) -> Optional[str]:
        if self.auth is None:
            return None
        return self.auth.split(':', 1)[0]

    @property
    def password(self) -> Optional[str]:
        if self.auth is None or ':' not in self.auth:
            return None
        return self.auth.split(':', 1)[1]

    @property
    def fragment(self) -> Optional[str]:
        return self.hash[1:] if self.hash is not None else None


def parse(url: str, parse_query: bool = False) -> URL:
    """Parse a URL string into a :py:class:`URL`.

    This is a permissive parser: it never raises for malformed input. Anything
    that can't be interpreted ends up as ``None`` or is folded into a
    neighboring component (for example, a non-numeric port stays part of the
    hostname). Use :py:func:`legacy_url.validate.validate` to reject such URLs.

    Args:
        url: URL to parse
        parse_query: Return ``query`` as a dict instead of a string

    Returns:
        Parsed URL
    """
    rest = url.strip()

    protocol = None
    match = SCHEME_PATTERN.match(rest)
    if match:
        protocol = match.group(1).lower() + ':'
        rest = rest[match.end() :]
    scheme = get_scheme(protocol)
    if protocol is None or scheme.special:
        rest = _convert_backslashes(rest)

    # Special schemes get an authority even without '//' (http:example.com)
    slashes = protocol is None
    has_authority = scheme.special
    if not scheme.opaque and rest.startswith('//'):
        rest = rest[2:]
        slashes = has_authority = True

    auth = host = port = hostname = None
    if has_authority:
        authority, rest = _split_authority(rest)
        auth, sep, hostport = authority.rpartition('@')
        auth = normalize_userinfo(auth) if sep else None
        hostname, port = parse_host(hostport)
        port = normalize_port(port, protocol)
        host = join_host(hostname, port)

    fragment = search = query = None
    if not scheme.literal:
        rest = tools.auto_escape(rest)
        if '#' in rest:
            rest, fragment = rest.split('#', 1)
            fragment = '#' + fragment
        if '?' in rest:
            rest, query = rest.split('?', 1)
            search = '?' + query
    if parse_query:
        query = tools.parse_query(query or '')

    pathname = rest or None
    if has_authority and not pathname:
        pathname = '/'
    path = (pathname or '') + (search or '') if pathname or search else None

    return URL(
        protocol=protocol,
        slashes=slashes,
        auth=auth,
        host=host,
        port=port,
        hostname=hostname,
        hash=fragment,
        search=search,
        query=query,
        pathname=pathname,
        path=path,
        href=_serialize(scheme, protocol, slashes, auth, host, pathname, search, fragment),
    )


def format(url: URLLike, charset: str = DEFAULT_CHARSET) -> str:
    """Serialize a :py:class:`URL`, or a mapping with the same keys, into a URL string.

    When ``hostname`` is given, ``host`` is rebuilt from ``hostname`` and ``port``,
    and the port is left out if it's the scheme's default. A ``query`` mapping is
    only used when there is no ``search``.

    Args:
        url: Parsed URL or URL components; missing keys are treated as absent
        charset: Encoding used for a ``query`` mapping

    Returns:
        URL string
    """
    if not isinstance(url, Mapping):
        url = asdict(url)

    protocol = url.get('protocol') or ''
    if protocol and not protocol.endswith(':'):
        protocol += ':'

    hostname, port = url.get('hostname'), url.get('port')
    if hostname is None and url.get('host') is not None:
        hostname, port = parse_host(url['host'])
    host = join_host(hostname, normalize_port(port, protocol)) if hostname is not None else None

    search = url.get('search')
    query = url.get('query')
    if not search and query:
        search = tools.stringify_query(query, charset) if isinstance(query, Mapping) else query
    if search and not search.startswith('?'):
        search = '?' + search

    fragment = url.get('hash')
    if fragment and not fragment.startswith('#'):
        fragment = '#' + fragment

    return _serialize(
        get_scheme(protocol),
        protocol,
        url.get('slashes', True),
        url.get('auth'),
        host,
        url.get('pathname'),
        search,
        fragment,
    )


def parse_host(hostport: str) -> Tuple[str, Optional[str]]:
    """Split the ``hostname[:port]`` part of an authority.

    IPv6 literals keep their brackets. The port is only split off if it's all
    digits; otherwise the whole string is the hostname.
    """
    if hostport.startswith('['):
        end = hostport.find(']') + 1
        if end:
            hostname, after = hostport[:end], hostport[end:]
            if not after:
                return hostname, None
            if after.startswith(':') and PORT_PATTERN.fullmatch(after[1:]):
                return hostname, after[1:]

    # 'a:1:80' stays whole; splitting it would leave 'a:1' to be split again on re-parse
    hostname, sep, port = hostport.rpartition(':')
    if not sep or not PORT_PATTERN.fullmatch(port) or TRAILING_PORT_PATTERN.search(hostname):
        return normalize_hostname(hostport), None
    return normalize_hostname(hostname), port


def normalize_hostname(hostname: str) -> str:
    """Lowercase and IDNA-encode a hostname. IPv6 literals are left as-is."""
    if hostname.startswith('[') and hostname.endswith(']'):
        return hostname
    if len(hostname) > HOSTNAME_MAX_LEN:
        return ''
    return tools.to_ascii_hostname(hostname.lower())


def normalize_port(port: Union[str, int, None], protocol: Optional[str] = None) -> Optional[str]:
    """Normalize URL port: remove default port number, and strip leading zeroes."""
    if port is None or port == '':
        return None
    port = str(port)
    if not PORT_PATTERN.fullmatch(port):
        return port
    port = str(int(port))
    if default_port(protocol) == port:
        return None
    return port


def normalize_userinfo(userinfo: str) -> Optional[str]:
    """Normalize userinfo part of the url"""
    return None if userinfo in ['', ':'] else userinfo


def join_host(hostname: str, port: Optional[str]) -> str:
    return f'{hostname}:{port}' if port is not None else hostname


def _find_first(rest: str, chars: str) -> int:
    """Get the index of the first of any of ``chars``, or the length of ``rest``"""
    end = len(rest)
    for char in chars:
        idx = rest.find(char)
        if idx != -1 and idx < end:
            end = idx
    return end


def _convert_backslashes(rest: str) -> str:
    """Treat '\\' as '/' up to the query or fragment, as browsers do"""
    end = _find_first(rest, '?#')
    return rest[:end].replace('\\', '/') + rest[end:]


def _split_authority(rest: str) -> Tuple[str, str]:
    """Split off everything up to the first '/', '?' or '#'"""
    end = _find_first(rest, HOST_ENDING_CHARS)
    return rest[:end], rest[end:]


def _serialize(
    scheme: Scheme,
    protocol: Optional[str],
    slashes: bool,
    auth: Optional[str],
    host: Optional[str],
    pathname: Optional[str],
    search: Optional[str],
    fragment: Optional[str],
) -> str:
    parts = [protocol or '']
    pathname = pathname or ''
    search = search or ''

    if host is not None:
        if slashes:
            parts.append('//')
        if auth:
            # Only escape what would end the authority; existing escapes are kept
            parts.append(tools.escape_chars(auth, HOST_ENDING_CHARS) + '@')
        parts.append(host)
        if pathname and not pathname.startswith('/'):
            pathname = '/' + pathname

    if not scheme.literal:
        pathname = tools.escape_chars(pathname, '?#')
        search = tools.escape_chars(search, '#')

    parts += [pathname, search, fragment or '']
    return ''.join(parts)
