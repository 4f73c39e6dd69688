"""Tests for the focus trap."""

from conftest import FakeFocusHost
from taskboard.a11y import FocusTrap


class TestFocusTrap:
    """Tests for focus containment."""

    def test_tab_wraps_around(self):
        host = FakeFocusHost(focused="opener")
        trap = FocusTrap(host)
        trap.activate(["F1", "F2", "F3"])
        trap.focus_initial()
        assert host.focused == "F1"

        host.focus("F3")
        assert trap.handle_tab()
        assert host.focused == "F1"

        assert trap.handle_tab(shift=True)
        assert host.focused == "F3"

    def test_tab_moves_forward_and_back(self):
        host = FakeFocusHost()
        trap = FocusTrap(host)
        trap.activate(["F1", "F2", "F3"])
        trap.focus_initial()

        trap.handle_tab()
        assert host.focused == "F2"
        trap.handle_tab(shift=True)
        assert host.focused == "F1"

    def test_deactivate_restores_previous_focus(self):
        host = FakeFocusHost(focused="opener")
        trap = FocusTrap(host)
        trap.activate(["F1", "F2", "F3"])
        trap.focus_initial()

        trap.deactivate()

        assert host.focused == "opener"
        assert not trap.is_active
        assert trap.context is None

    def test_focus_outside_surface_is_pulled_back(self):
        host = FakeFocusHost()
        trap = FocusTrap(host)
        trap.activate(["F1", "F2"])

        host.focus("elsewhere")
        trap.handle_tab()
        assert host.focused == "F1"

        host.focus("elsewhere")
        trap.handle_tab(shift=True)
        assert host.focused == "F2"

    def test_no_focusables_is_tolerated(self):
        host = FakeFocusHost(focused="opener")
        trap = FocusTrap(host)
        trap.activate([])

        assert not trap.focus_initial()
        assert trap.handle_tab()
        assert host.calls == []

        trap.deactivate()
        assert host.focused == "opener"

    def test_escape_calls_close_handler(self):
        closed = []
        trap = FocusTrap(FakeFocusHost(), on_close=lambda: closed.append(True))
        trap.activate(["F1"])

        assert trap.handle_escape()
        assert closed == [True]

    def test_escape_without_handler(self):
        trap = FocusTrap(FakeFocusHost())
        trap.activate(["F1"])
        assert not trap.handle_escape()

    def test_inactive_trap_ignores_keys(self):
        closed = []
        trap = FocusTrap(FakeFocusHost(), on_close=lambda: closed.append(True))

        assert not trap.handle_tab()
        assert not trap.handle_escape()
        assert closed == []

    def test_update_focusables(self):
        host = FakeFocusHost()
        trap = FocusTrap(host)
        trap.activate([])

        trap.update_focusables(["A", "B"])
        trap.focus_initial()

        assert host.focused == "A"

    def test_reactivation_keeps_original_opener(self):
        host = FakeFocusHost(focused="opener")
        trap = FocusTrap(host)
        trap.activate(["F1"])
        trap.focus_initial()

        trap.activate(["G1"])
        trap.deactivate()

        assert host.focused == "opener"

    def test_deactivate_twice_is_harmless(self):
        host = FakeFocusHost(focused="opener")
        trap = FocusTrap(host)
        trap.activate(["F1"])
        trap.deactivate()
        trap.deactivate()
        assert host.calls == ["opener"]
