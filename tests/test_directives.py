"""Tests for the directive catalogue."""

from __future__ import annotations

import pytest

from csp_builder import Policy
from csp_builder.directives import (
    FETCH_DIRECTIVES,
    HEADER,
    HEADER_REPORT_ONLY,
    META_DIRECTIVES,
    VALUE_DIRECTIVES,
    Directive,
    DirectiveKind,
    fetch_directive,
    header_name,
)
from csp_builder.errors import UnknownDirectiveError


class TestCatalogue:
    def test_every_table_entry_has_a_member(self):
        expected = (
            {f"{base}-src" for base in FETCH_DIRECTIVES}
            | set(VALUE_DIRECTIVES)
            | set(META_DIRECTIVES)
        )
        assert {d.value for d in Directive} == expected

    def test_kinds(self):
        assert Directive.SCRIPT_SRC.kind is DirectiveKind.FETCH
        assert Directive.FRAME_ANCESTORS.kind is DirectiveKind.VALUE
        assert Directive.UPGRADE_INSECURE_REQUESTS.kind is DirectiveKind.META

    def test_takes_values(self):
        assert Directive.IMG_SRC.takes_values
        assert Directive.REPORT_URI.takes_values
        assert not Directive.BLOCK_ALL_MIXED_CONTENT.takes_values

    def test_attribute_names(self):
        assert Directive.REQUIRE_SRI_FOR.attribute == "require_sri_for"
        assert Directive.DEFAULT_SRC.attribute == "default_src"

    def test_policy_has_a_method_per_directive(self):
        """Every catalogue entry is reachable as a Policy method."""
        for directive in Directive:
            method = getattr(Policy, directive.attribute)
            assert method.__name__ == directive.attribute
            assert directive.value in method.__doc__

    def test_str_is_header_key(self):
        assert str(Directive.BASE_URI) == "base-uri"
        assert f"{Directive.BASE_URI}" == "base-uri"


class TestLookup:
    @pytest.mark.parametrize("name", [
        "script-src",
        "script_src",
        "SCRIPT-SRC",
        " script-src ",
        Directive.SCRIPT_SRC,
    ])
    def test_accepted_spellings(self, name):
        assert Directive.lookup(name) is Directive.SCRIPT_SRC

    @pytest.mark.parametrize("name", ["script", "sandbox", "", "src"])
    def test_unknown_names(self, name):
        with pytest.raises(UnknownDirectiveError):
            Directive.lookup(name)

    def test_non_string_rejected(self):
        with pytest.raises(UnknownDirectiveError):
            Directive.lookup(3)


class TestFetchDirective:
    def test_base_name_gets_src_suffix(self):
        assert fetch_directive("script") is Directive.SCRIPT_SRC
        assert fetch_directive("worker") is Directive.WORKER_SRC

    def test_value_directive_is_not_a_fetch_base(self):
        with pytest.raises(UnknownDirectiveError):
            fetch_directive("base-uri")


class TestHeaderName:
    def test_enforcing(self):
        assert header_name() == HEADER == "Content-Security-Policy"

    def test_report_only(self):
        assert header_name(report_only=True) == HEADER_REPORT_ONLY
        assert HEADER_REPORT_ONLY == "Content-Security-Policy-Report-Only"
