"""Tests for normalize_hostname function."""
import pytest

from legacy_url.legacy_url import normalize_hostname

EXPECTED_DATA = {
    "site.com": "site.com",
    "SITE.COM": "site.com",
    "site.com.": "site.com.",
    "[FE80::1]": "[FE80::1]",
    "пример.испытание": "xn--e1afmkfd.xn--80akhbyknj4f",
    "ПРИМЕР.испытание": "xn--e1afmkfd.xn--80akhbyknj4f",
    "ñ..com": "ñ..com",
    "a" * 256: "",
}


@pytest.mark.parametrize("host, expected", EXPECTED_DATA.items())
def test_normalize_hostname_result_is_expected(host, expected):
    """Assert we got expected results from the normalize_hostname function."""
    assert normalize_hostname(host) == expected
