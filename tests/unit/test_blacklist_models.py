"""Unit tests for blacklist data models."""

import pytest

from historyblock.models.blacklist import (
    BlacklistState,
    HistoryBlockError,
    ListMode,
    PurgeLog,
    StorageUnavailableError,
    UnknownActionError,
    VisitDecision,
)


class TestListMode:
    """Tests for ListMode.parse()."""

    @pytest.mark.parametrize("value,expected", [
        ("blacklist", ListMode.BLACKLIST),
        ("whitelist", ListMode.WHITELIST),
        (ListMode.WHITELIST, ListMode.WHITELIST),
    ])
    def test_parse_known_values(self, value, expected):
        assert ListMode.parse(value) is expected

    @pytest.mark.parametrize("value", ["foo", "", "Blacklist", None, 0, ["blacklist"]])
    def test_parse_unknown_values(self, value):
        assert ListMode.parse(value) is None


class TestBlacklistState:
    """Tests for BlacklistState serialization."""

    def test_default_state(self):
        state = BlacklistState()
        assert state.patterns == ()
        assert state.mode is ListMode.BLACKLIST

    def test_to_dict_uses_storage_keys(self):
        state = BlacklistState(patterns=("a", "b"), mode=ListMode.WHITELIST)
        assert state.to_dict() == {"blacklist": ["a", "b"], "listMode": "whitelist"}

    def test_from_dict(self):
        state = BlacklistState.from_dict({"blacklist": ["a"], "listMode": "whitelist"})
        assert state == BlacklistState(patterns=("a",), mode=ListMode.WHITELIST)

    @pytest.mark.parametrize("data", [None, {}, {"blacklist": "a,b"}, {"listMode": "foo"}])
    def test_from_dict_malformed_defaults(self, data):
        state = BlacklistState.from_dict(data)
        assert state.patterns == ()
        assert state.mode is ListMode.BLACKLIST

    def test_from_dict_drops_non_string_entries(self):
        state = BlacklistState.from_dict({"blacklist": ["a", 3, None, "b"]})
        assert state.patterns == ("a", "b")

    def test_state_is_immutable(self):
        state = BlacklistState()
        with pytest.raises(AttributeError):
            state.mode = ListMode.WHITELIST

    def test_with_helpers_return_new_state(self):
        state = BlacklistState(patterns=("a",))
        assert state.with_patterns(["b"]).patterns == ("b",)
        assert state.with_mode(ListMode.WHITELIST).patterns == ("a",)
        assert state.patterns == ("a",)


class TestVisitDecisionAndErrors:
    """Tests for VisitDecision, PurgeLog and error types."""

    def test_visit_decision_to_dict(self):
        decision = VisitDecision("https://a.com", True, ListMode.BLACKLIST, "a")
        assert decision.to_dict() == {
            "address": "https://a.com",
            "purge": True,
            "mode": "blacklist",
            "matched_pattern": "a",
        }

    def test_purge_log_to_dict(self):
        assert PurgeLog(urls=["x"]).to_dict() == {"urls": ["x"], "count": 1}

    def test_storage_error_code(self):
        error = StorageUnavailableError("down", {"path": "/tmp/x"})
        assert isinstance(error, HistoryBlockError)
        assert error.to_dict() == {
            "code": "STORAGE_UNAVAILABLE",
            "message": "down",
            "details": {"path": "/tmp/x"},
        }

    def test_unknown_action_error(self):
        error = UnknownActionError("nope")
        assert error.code == "MESSAGE_UNKNOWN_ACTION"
        assert error.details == {"action": "nope"}

    def test_unknown_action_error_non_string(self):
        assert UnknownActionError(42).details == {"action": None}
