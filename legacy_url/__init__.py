# flake8: noqa: F401
from .errors import *
from .legacy_url import (
    URL,
    format,
    normalize_hostname,
    normalize_port,
    normalize_userinfo,
    parse,
    parse_host,
)
from .schemes import SCHEMES, Scheme, default_port, get_scheme
from .validate import ValidationResult, parse_strict, validate

__version__ = '0.1.0'
