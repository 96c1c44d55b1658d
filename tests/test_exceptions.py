"""
Tests for the exception hierarchy.
"""

import pytest

from sponsorscope.exceptions import (
    SponsorscopeError,
    ValidationError,
    InvalidInputError,
    LookupFailedError,
    SponsorNotFoundError,
    StoreError,
    StoreConnectionError,
    StoreQueryError,
    RegisterFormatError,
    RegisterReadError,
)


class TestExceptionHierarchy:

    def test_all_inherit_from_base(self):
        for exc_class in [
            ValidationError, InvalidInputError, LookupFailedError, SponsorNotFoundError,
            StoreError, StoreConnectionError, StoreQueryError, RegisterFormatError, RegisterReadError,
        ]:
            assert issubclass(exc_class, SponsorscopeError), (
                f"{exc_class.__name__} should inherit from SponsorscopeError"
            )

    def test_store_hierarchy(self):
        assert issubclass(StoreConnectionError, StoreError)
        assert issubclass(StoreQueryError, StoreError)

    def test_catch_by_category(self):
        with pytest.raises(ValidationError):
            raise InvalidInputError("a")
        with pytest.raises(StoreError):
            raise StoreQueryError("relation does not exist")


class TestExceptionDetails:

    def test_store_error_keeps_message_verbatim(self):
        exc = StoreQueryError('relation "sponsorship_companies" does not exist')
        assert str(exc) == 'relation "sponsorship_companies" does not exist'
        assert exc.details == {}

    def test_invalid_input(self):
        exc = InvalidInputError("a")
        assert exc.message == "Company name must be at least 2 characters long"
        assert exc.details == {"query": "a", "min_length": 2}

    def test_sponsor_not_found_carries_suggestion(self):
        exc = SponsorNotFoundError("Zzzznotreal")
        assert exc.message == "Company not found in official sponsorship register"
        assert exc.suggestion == "Check spelling or try a partial company name"
        assert exc.details["query"] == "Zzzznotreal"

    def test_register_format_lists_missing_columns(self):
        exc = RegisterFormatError("register.csv", ["Route", "County"])
        assert "Route, County" in str(exc)
        assert exc.details["missing"] == ["Route", "County"]

    def test_register_read_error(self):
        exc = RegisterReadError("nope.csv", "No such file or directory")
        assert "nope.csv" in str(exc)
        assert exc.details == {"path": "nope.csv", "reason": "No such file or directory"}
