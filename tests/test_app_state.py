"""
Tests for the reference AppState container.
"""

from state_monitor.state import AppState


class TestAppStateAccess:
    """Test dictionary-like access."""

    def test_new_empty_state(self):
        state = AppState()
        assert state.to_json() == {}

    def test_item_access(self):
        state = AppState({"a": 1})
        state["b"] = 2
        assert state["a"] == 1
        assert state.get("b") == 2
        assert state.get("c", "missing") == "missing"
        assert "a" in state
        assert "c" not in state

    def test_update(self):
        state = AppState({"a": 1})
        state.update({"a": 2, "b": 3})
        assert state.to_json() == {"a": 2, "b": 3}

    def test_to_json_returns_underlying_dict(self):
        state = AppState({"a": 1})
        assert state.to_json() is state.to_json()

    def test_defaults_are_copied(self):
        defaults = {"a": [1]}
        state = AppState(defaults)
        defaults["a"].append(2)
        assert state["a"] == [1]


class TestAppStateEvents:
    """Test handler registration and emission."""

    def test_emit_passes_arguments(self):
        state = AppState()
        received = []
        state.on("custom", lambda *args: received.append(args))

        state.emit("custom", ["a"], 2)

        assert received == [(["a"], 2)]

    def test_emit_unknown_event(self):
        AppState().emit("nothing")

    def test_off_removes_every_registration(self):
        state = AppState()
        calls = []

        def handler(keys):
            calls.append("handler")

        def other(keys):
            calls.append("other")

        state.on("save_with_changes", handler).on("save_with_changes", handler)
        state.on("save_with_changes", other)
        assert state.listener_count("save_with_changes") == 3

        state.off("save_with_changes", handler)
        state.emit("save_with_changes", [])

        assert calls == ["other"]
        assert state.listener_count("save_with_changes") == 1

    def test_off_unknown_event(self):
        state = AppState()
        state.off("missing", print)
        assert state.listener_count("missing") == 0

    def test_handler_removed_during_emit(self):
        state = AppState()
        calls = []

        def once(keys):
            calls.append("once")
            state.off("fetch_with_changes", once)

        state.on("fetch_with_changes", once)
        state.on("fetch_with_changes", lambda keys: calls.append("after"))

        state.emit("fetch_with_changes", [])
        state.emit("fetch_with_changes", [])

        assert calls == ["once", "after", "after"]


class TestAppStateLifecycle:
    """Test save, fetch and reset."""

    def _record(self, state, event):
        received = []
        state.on(event, received.append)
        return received

    def test_save_emits_changed_keys(self):
        state = AppState({"a": 1, "b": 2})
        received = self._record(state, "save_with_changes")

        state["b"] = 3
        assert state.save() == ["b"]
        assert received == [["b"]]

    def test_save_without_changes_does_not_emit(self):
        state = AppState({"a": 1})
        received = self._record(state, "save_with_changes")

        assert state.save() == []
        assert received == []

    def test_save_detects_nested_change(self):
        state = AppState({"a": {"b": 1}})
        state["a"]["b"] = 2
        assert state.save() == ["a"]
        assert state.save() == []

    def test_fetch_overlays_defaults(self):
        state = AppState({"a": 1, "b": 2})
        received = self._record(state, "fetch_with_changes")

        assert state.fetch({"b": 3}) == ["b"]
        assert state.to_json() == {"a": 1, "b": 3}
        assert received == [["b"]]

    def test_fetch_reports_removed_keys(self):
        state = AppState({"a": 1})
        state["extra"] = True
        assert state.fetch({"a": 1}) == ["extra"]
        assert "extra" not in state

    def test_fetch_copies_data(self):
        state = AppState()
        data = {"a": [1]}
        state.fetch(data)
        data["a"].append(2)
        assert state["a"] == [1]

    def test_reset_restores_defaults(self):
        state = AppState({"a": 1})
        received = self._record(state, "reset_with_changes")

        state["a"] = 5
        assert state.reset() == ["a"]
        assert state["a"] == 1
        assert state.reset() == []
        assert received == [["a"]]
