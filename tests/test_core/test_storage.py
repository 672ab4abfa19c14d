"""Tests for storage value parsing."""

import pytest

from gridstat.core.exceptions import ParseError, UnsupportedUnitError
from gridstat.core.storage import StorageValue, parse_storage_value


class TestParseStorageValue:
    """Tests for parse_storage_value()."""

    def test_gigabytes(self):
        sv = parse_storage_value("10.2G")
        assert sv.size == 10.2
        assert sv.scale == "G"
        assert sv.bytes == 10_200_000_000

    def test_megabytes(self):
        assert parse_storage_value("512M").bytes == 512_000_000

    def test_terabytes(self):
        assert parse_storage_value("1.5T").bytes == 1_500_000_000_000

    def test_kilobytes(self):
        assert parse_storage_value("964.5K").bytes == 964_500

    def test_decimal_not_binary(self):
        assert parse_storage_value("1G").bytes == 1_000_000_000

    def test_truncates_fractional_bytes(self):
        assert parse_storage_value("0.0000000015G").bytes == 1

    def test_zero(self):
        sv = parse_storage_value("0.000M")
        assert sv.bytes == 0
        assert sv.scale == "M"

    def test_invalid_magnitude(self):
        with pytest.raises(ParseError, match="Invalid storage magnitude"):
            parse_storage_value("abcG")

    def test_empty(self):
        with pytest.raises(ParseError):
            parse_storage_value("")

    @pytest.mark.parametrize("text", ["nanG", "NaNM", "infG", "-infT", "1e400G"])
    def test_non_finite_magnitude(self, text):
        with pytest.raises(ParseError, match="Invalid storage magnitude"):
            parse_storage_value(text)

    @pytest.mark.parametrize("text", ["1_0G", "10 G", "0x10G"])
    def test_non_decimal_magnitude(self, text):
        with pytest.raises(ParseError):
            parse_storage_value(text)

    def test_exponent_magnitude(self):
        assert parse_storage_value("1e3M").bytes == 1_000_000_000

    def test_unsupported_unit(self):
        with pytest.raises(UnsupportedUnitError, match="'P'"):
            parse_storage_value("2P")

    def test_unsupported_unit_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_storage_value("100")

    def test_to_dict_and_str(self):
        sv = StorageValue(size=10.2, scale="G", bytes=10_200_000_000)
        assert sv.to_dict() == {"size": 10.2, "scale": "G", "bytes": 10_200_000_000}
        assert str(sv) == "10.2G"
