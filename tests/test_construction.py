"""Tests covering construction, masking and wrapping of structured errors."""

import pytest

import richerr
from richerr import StructuredError


def test_new_wraps_a_fresh_exception() -> None:
    err = richerr.new("some error")
    assert isinstance(err, StructuredError)
    assert str(err) == "some error"
    assert str(richerr.cause(err)) == "some error"
    assert err.mask is None
    assert err.stack


def test_errorf_formats_the_cause_message() -> None:
    err = richerr.errorf("some error %d %s", 1, "Hello")
    assert str(err) == "some error 1 Hello"
    assert str(err.cause) == "some error 1 Hello"


def test_errorf_without_args_keeps_percent_signs() -> None:
    assert str(richerr.errorf("100% broken")) == "100% broken"


def test_errorf_accepts_a_mapping_of_named_fields() -> None:
    err = richerr.errorf("%(user)s failed", {"user": "bob"})
    assert str(err) == "bob failed"


def test_structured_error_is_raisable() -> None:
    with pytest.raises(StructuredError) as info:
        raise richerr.new("boom")
    assert str(info.value) == "boom"


@pytest.mark.parametrize(
    "build",
    [
        lambda: richerr.extend(None),
        lambda: richerr.mask(None, ValueError("mask")),
        lambda: richerr.mask(None, None),
        lambda: richerr.wrap(None, "x"),
        lambda: richerr.wrapf(None, "read %s", "config.yaml"),
    ],
)
def test_none_input_yields_none(build) -> None:
    assert build() is None


def test_extend_promotes_plain_exception() -> None:
    original = KeyError("missing")
    err = richerr.extend(original)
    assert isinstance(err, StructuredError)
    assert richerr.cause(err) is original
    assert err.__cause__ is original
    assert str(err) == str(original)


def test_extend_returns_structured_error_unchanged() -> None:
    err = richerr.new("once")
    assert richerr.extend(err) is err


def test_mask_replaces_public_message_but_keeps_cause() -> None:
    err = richerr.mask(richerr.new("ABC"), richerr.new("XYZ"))
    assert str(err) == "XYZ"
    assert str(richerr.cause(err)) == "ABC"
    assert richerr.is_equal(err, richerr.new("ABC"))


def test_mask_updates_in_place() -> None:
    first = richerr.mask(richerr.new("ABC"), richerr.new("001"))
    second = richerr.mask(first, richerr.new("XYZ"))
    assert second is first
    assert str(second) == "XYZ"


def test_mask_with_none_reverts_to_cause_message() -> None:
    err = richerr.mask(richerr.new("ABC"), ValueError("hidden"))
    assert str(richerr.mask(err, None)) == "ABC"


def test_mask_on_plain_exception_always_materializes() -> None:
    original = ValueError("ERROR HERE")
    err = richerr.mask(original, None)
    assert isinstance(err, StructuredError)
    assert str(err) == "ERROR HERE"

    masked = richerr.mask(ValueError("ERROR HERE"), ValueError("MASK ERROR HERE"))
    assert str(masked) == "MASK ERROR HERE"
    assert str(masked.cause) == "ERROR HERE"


def test_set_mask_method_matches_mask_function() -> None:
    err = richerr.new("ERROR")
    assert str(err.set_mask(ValueError("MASK ERROR"))) == "MASK ERROR"
    assert str(err.set_mask(None)) == "ERROR"


def test_wrap_prefixes_inner_message() -> None:
    inner = richerr.new("i/o error")
    err = richerr.wrap(inner, "read")
    assert str(err) == "read: i/o error"
    assert err is not inner
    assert richerr.cause(err) is inner


def test_wrapf_formats_annotation() -> None:
    err = richerr.wrapf(richerr.new("i/o error"), 'read "%s"', "config.yaml")
    assert str(err) == 'read "config.yaml": i/o error'


def test_wrapf_accepts_a_mapping_of_named_fields() -> None:
    err = richerr.wrapf(ValueError("denied"), "open %(path)s", {"path": "a.txt"})
    assert str(err) == "open a.txt: denied"


def test_wrap_chain_builds_breadcrumbs() -> None:
    err = richerr.wrap(richerr.wrap(OSError("disk full"), "write"), "save report")
    assert str(err) == "save report: write: disk full"
    assert len(err.chain()) == 2


def test_mask_hides_wrapped_breadcrumbs() -> None:
    err = richerr.mask(richerr.wrap(richerr.new("i/o error"), "read"), ValueError("try again later"))
    assert str(err) == "try again later"


def test_wrap_shows_masked_inner_message() -> None:
    inner = richerr.mask(richerr.new("secret"), ValueError("public"))
    assert str(richerr.wrap(inner, "load")) == "load: public"


def test_constructor_requires_cause() -> None:
    with pytest.raises(TypeError):
        StructuredError(None)  # type: ignore[arg-type]


def test_message_is_total() -> None:
    class Unprintable(Exception):
        def __str__(self) -> str:
            raise RuntimeError("no")

    assert richerr.message(None) == ""
    assert richerr.message(ValueError("plain")) == "plain"
    assert richerr.message(richerr.extend(Unprintable())) == "<unprintable Unprintable>"


def test_public_message_never_exposes_stack_or_data() -> None:
    err = richerr.new("public")
    richerr.set_data(err, "user_id", 42)
    assert str(err) == "public"
    assert "42" not in repr(err)
