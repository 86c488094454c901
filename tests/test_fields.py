"""Tests for field value decomposition and composition."""

import pytest

from hl7wire.model.fields import (
    ComponentList,
    Scalar,
    SubcomponentList,
    compose,
    decompose,
    is_blank,
    to_field_value,
)


# ── decompose tests ──


class TestDecompose:
    def test_components_and_subcomponents(self) -> None:
        result = decompose("xx^x&y&z^yy^zz", "^", "&")
        assert isinstance(result, ComponentList)
        assert isinstance(result[1], SubcomponentList)
        assert result == ["xx", ["x", "y", "z"], "yy", "zz"]

    def test_plain_text_collapses_to_scalar(self) -> None:
        result = decompose("abc", "^", "&")
        assert isinstance(result, Scalar)
        assert result == "abc"

    def test_single_component_with_subcomponents(self) -> None:
        result = decompose("x&y&z", "^", "&")
        assert isinstance(result, SubcomponentList)
        assert result == ["x", "y", "z"]

    def test_empty_components_dropped_by_default(self) -> None:
        assert decompose("^AAAA1^^^BB", "^", "&") == ["AAAA1", "BB"]

    def test_empty_components_kept_on_request(self) -> None:
        result = decompose("^AAAA1^^^BB", "^", "&", keep_empty_subfields=True)
        assert result == ["", "AAAA1", "", "", "BB"]

    def test_single_surviving_component_collapses(self) -> None:
        result = decompose("^x^", "^", "&")
        assert isinstance(result, Scalar)
        assert result == "x"

    def test_empty_text(self) -> None:
        assert decompose("", "^", "&") == ComponentList()
        assert decompose("", "^", "&", keep_empty_subfields=True) == Scalar("")

    def test_custom_separators(self) -> None:
        assert decompose("x*y*z", "*", "&") == ["x", "y", "z"]
        assert decompose("a^x@y@z^b", "^", "@") == ["a", ["x", "y", "z"], "b"]


# ── compose tests ──


class TestCompose:
    def test_scalar_verbatim(self) -> None:
        assert compose(Scalar("abc"), "^", "&") == "abc"

    def test_component_list(self) -> None:
        value = ComponentList((Scalar("xx"), SubcomponentList(("x", "y", "z")), Scalar("yy")))
        assert compose(value, "^", "&") == "xx^x&y&z^yy"

    def test_subcomponent_list(self) -> None:
        assert compose(SubcomponentList(("a", "b")), "^", "&") == "a&b"

    def test_absent_value(self) -> None:
        assert compose(None, "^", "&") == ""

    @pytest.mark.parametrize(
        "value",
        [
            Scalar("PAT001"),
            SubcomponentList(("x", "y", "z")),
            ComponentList((Scalar("DOE"), Scalar("JOHN"))),
            ComponentList((Scalar("a"), SubcomponentList(("b", "c")), Scalar("d"))),
        ],
    )
    def test_decompose_inverts_compose(self, value: object) -> None:
        result = decompose(compose(value, "^", "&"), "^", "&")
        assert result == value
        assert type(result) is type(value)

    def test_lossy_when_empty_components_dropped(self) -> None:
        assert compose(decompose("^a^^b", "^", "&"), "^", "&") == "a^b"


# ── Coercion tests ──


class TestFieldValueHelpers:
    def test_str_becomes_scalar(self) -> None:
        value = to_field_value("abc")
        assert isinstance(value, Scalar)
        assert value.text == "abc"

    def test_nested_lists(self) -> None:
        value = to_field_value(["1", ["a", "b"], "3"])
        assert isinstance(value, ComponentList)
        assert isinstance(value[1], SubcomponentList)
        assert value.to_native() == ["1", ["a", "b"], "3"]

    def test_none_stays_none(self) -> None:
        assert to_field_value(None) is None

    def test_field_values_pass_through(self) -> None:
        value = SubcomponentList(("a", "b"))
        assert to_field_value(value) is value

    def test_blank_values(self) -> None:
        assert is_blank(None)
        assert is_blank(Scalar(""))
        assert not is_blank(Scalar("x"))
        assert not is_blank(ComponentList())

    def test_scalar_repr(self) -> None:
        assert repr(Scalar("a")) == "Scalar('a')"

    def test_lists_are_hashable(self) -> None:
        values = {ComponentList((Scalar("a"),)), ComponentList((Scalar("a"),))}
        assert len(values) == 1
