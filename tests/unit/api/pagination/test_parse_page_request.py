"""Unit tests for parsing the page[number] / page[size] query values."""

import pytest

from api_skeleton.api.pagination.paginator import (
    DEFAULT_PAGE_SIZE,
    PageRequest,
    parse_page_request,
)
from api_skeleton.core.exceptions import ErrorCode, ValidationError


@pytest.mark.unit
class TestParsePageRequest:
    """Tests for parse_page_request."""

    def test_number_and_size(self) -> None:
        """Both values are parsed as base-10 integers."""
        assert parse_page_request("3", "25") == PageRequest(number=3, size=25)

    def test_default_size(self) -> None:
        """A missing size falls back to the default of 10."""
        page = parse_page_request("2")

        assert page.size == DEFAULT_PAGE_SIZE == 10

    def test_configured_default_size(self) -> None:
        """The default size can be supplied by the caller."""
        assert parse_page_request("1", None, default_size=50).size == 50

    @pytest.mark.parametrize("size", ["", "   "])
    def test_blank_size_uses_default(self, size: str) -> None:
        """An empty page[size] is treated as absent."""
        assert parse_page_request("1", size).size == DEFAULT_PAGE_SIZE

    def test_surrounding_whitespace(self) -> None:
        """Whitespace around the digits is ignored."""
        assert parse_page_request(" 4 ", " 5 ") == PageRequest(number=4, size=5)

    def test_integers_pass_through(self) -> None:
        """Already-parsed integers are accepted."""
        assert parse_page_request(2, 3) == PageRequest(number=2, size=3)

    @pytest.mark.parametrize(("raw", "expected"), [("0", 0), ("-1", -1), ("+7", 7)])
    def test_out_of_range_numbers_are_accepted(self, raw: str, expected: int) -> None:
        """Numbers below 1 are left for the paginator to treat as out of bounds."""
        assert parse_page_request(raw).number == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "3.0", "1_000", "0x10", "", "½"])
    def test_non_integer_number_rejected(self, raw: str) -> None:
        """Anything but a base-10 integer is a client error."""
        with pytest.raises(ValidationError) as exc_info:
            parse_page_request(raw)

        assert exc_info.value.error_code == ErrorCode.VALIDATION_ERROR.value
        assert exc_info.value.context["parameter"] == "page[number]"
        assert "page[number]" in exc_info.value.message

    @pytest.mark.parametrize("raw", ["ten", "2.5", "NaN"])
    def test_non_integer_size_rejected(self, raw: str) -> None:
        """The offending parameter is named in the error."""
        with pytest.raises(ValidationError) as exc_info:
            parse_page_request("1", raw)

        assert exc_info.value.context["parameter"] == "page[size]"

    @pytest.mark.parametrize("raw", ["0", "-5", 0, -1])
    def test_non_positive_size_rejected(self, raw: str | int) -> None:
        """Page sizes must be positive."""
        with pytest.raises(ValidationError, match="positive"):
            parse_page_request("1", raw)

    def test_oversized_number_rejected(self) -> None:
        """Digit strings too long for int() are a client error."""
        with pytest.raises(ValidationError) as exc_info:
            parse_page_request("1" * 5000)

        assert exc_info.value.context["parameter"] == "page[number]"
        assert isinstance(exc_info.value.cause, ValueError)

    def test_oversized_size_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_page_request("1", "9" * 5000)

        assert exc_info.value.context["parameter"] == "page[size]"
