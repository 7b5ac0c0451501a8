"""Strict URL validation on top of the permissive parser.

:py:func:`legacy_url.parse` accepts anything. Callers that need to reject
malformed URLs can use :py:func:`validate`, which returns the parsed URL along
with every problem found, or :py:func:`parse_strict`, which raises the first one.
"""
import ipaddress
import logging
import re
from dataclasses import dataclass
from typing import Iterator, Tuple

from .errors import (
    EmptyURLError,
    InvalidCharacterError,
    InvalidHostError,
    InvalidPortError,
    MissingHostError,
    MissingSchemeError,
    URLError,
)
from .legacy_url import URL, parse
from .schemes import get_scheme

FORBIDDEN_CHAR_PATTERN = re.compile(r'[\x00-\x20\x7f]')
FORBIDDEN_HOST_CHAR_PATTERN = re.compile(r'[#%/:<>?@\[\\\]^|]')
MAX_PORT = 65535

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    url: URL
    errors: Tuple[URLError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> URL:
        """Get the parsed URL, or raise the first validation error"""
        if self.errors:
            raise self.errors[0]
        return self.url


def validate(url: str) -> ValidationResult:
    """Parse a URL and check it for problems the permissive parser would let through.

    Args:
        url: URL to validate

    Returns:
        Parsed URL and a (possibly empty) tuple of errors
    """
    parsed = parse(url)
    errors = tuple(_check_url(url.strip(), parsed))
    if errors:
        logger.debug(f'Rejected URL {url!r}: {", ".join(str(e) for e in errors)}')
    return ValidationResult(parsed, errors)


def parse_strict(url: str) -> URL:
    """Parse a URL, raising a :py:class:`.URLError` subclass if it's invalid"""
    return validate(url).unwrap()


def _check_url(url: str, parsed: URL) -> Iterator[URLError]:
    if not url:
        yield EmptyURLError('URL is empty')
        return

    match = FORBIDDEN_CHAR_PATTERN.search(url)
    if match:
        yield InvalidCharacterError(
            f'Forbidden character {match.group(0)!r} at position {match.start()}'
        )

    if parsed.protocol is None:
        yield MissingSchemeError(f'No scheme in {url!r}')

    scheme = get_scheme(parsed.protocol)
    if parsed.hostname:
        yield from _check_hostname(parsed.hostname)
    elif scheme.special and not scheme.empty_host:
        yield MissingHostError(f'{parsed.protocol} URL requires a host')

    if parsed.port is not None and int(parsed.port) > MAX_PORT:
        yield InvalidPortError(f'Port out of range: {parsed.port}')


def _check_hostname(hostname: str) -> Iterator[URLError]:
    if hostname.startswith('[') and hostname.endswith(']'):
        try:
            ipaddress.IPv6Address(hostname[1:-1])
        except ValueError:
            yield InvalidHostError(f'Invalid IPv6 address: {hostname}')
        return

    # The parser leaves non-numeric ports attached to the hostname
    bracket_end = hostname.rfind(']') + 1 if hostname.startswith('[') else 0
    if ':' in hostname[bracket_end:]:
        hostname, _, port = hostname.rpartition(':')
        yield InvalidPortError(f'Invalid port: {port!r}')

    match = FORBIDDEN_HOST_CHAR_PATTERN.search(hostname)
    if match:
        yield InvalidHostError(f'Forbidden host character {match.group(0)!r} in {hostname!r}')
