"""Tests for log_lib.redact — Obscured values."""

from fanlog.lib.log_lib import Obscured, init_router
from fanlog.lib.log_lib.redact import PLACEHOLDER


class TestObscured:
    """Values shown in debug, masked in release."""

    def test_debug_shows_value(self):
        assert str(Obscured("s3cret", debug=True)) == "s3cret"

    def test_release_masks_value(self):
        assert str(Obscured("s3cret", debug=False)) == PLACEHOLDER == "********"

    def test_non_string_values(self):
        assert str(Obscured(1234, debug=True)) == "1234"
        assert str(Obscured({'k': 1}, debug=False)) == PLACEHOLDER

    def test_fstring_interpolation(self):
        assert f"token={Obscured('abc', debug=False)}" == "token=********"
        assert f"[{Obscured('ab', debug=True):>4}]" == "[  ab]"

    def test_follows_router_mode(self):
        init_router(debug=False)
        assert str(Obscured("s3cret")) == PLACEHOLDER
        init_router(debug=True)
        assert str(Obscured("s3cret")) == "s3cret"

    def test_repr_never_leaks_in_release(self):
        assert "s3cret" not in repr(Obscured("s3cret", debug=False))
