"""Tests for the multi-error collector."""

import pytest

from quorum_core.errors import MultiError, QuorumError


class TestMultiError:
    def test_empty_collector(self):
        errs = MultiError()
        assert not errs
        assert len(errs) == 0
        assert errs.err() is None
        errs.raise_if_any()

    def test_blank_messages_ignored(self):
        errs = MultiError()
        errs.add("")
        errs.add_error(None)
        assert not errs

    def test_messages_joined(self):
        errs = MultiError()
        errs.add("remove label lgtm: 404")
        errs.add_error(RuntimeError("timeout"))
        assert len(errs) == 2
        assert errs.message() == "remove label lgtm: 404; timeout"
        assert errs.messages == ["remove label lgtm: 404", "timeout"]

    def test_error_without_text_uses_type_name(self):
        errs = MultiError()
        errs.add_error(KeyError())
        assert errs.messages == ["KeyError"]

    def test_raise_if_any(self):
        errs = MultiError()
        errs.add("first")
        errs.add("second")
        with pytest.raises(QuorumError, match="first; second"):
            errs.raise_if_any()
