"""Unit tests for gesture interpretation."""

import pytest

from gridbook.core.exceptions import InvalidAddressError
from gridbook.models import KeyActionKind, Selection
from gridbook.selection import SelectionController


@pytest.fixture
def controller() -> SelectionController:
    return SelectionController()


class TestClicks:
    """Test click, ctrl-click and shift-click."""

    def test_plain_click(self, controller):
        """Test a click selects one cell and anchors there."""
        selection = controller.click("C3")
        assert selection == Selection(active_cell="C3", range=["C3"], anchor="C3")

    def test_click_rejects_bad_id(self, controller):
        """Test clicks validate identifiers."""
        with pytest.raises(InvalidAddressError):
            controller.click("3C")

    def test_ctrl_click_adds(self, controller):
        """Test ctrl-click appends without moving the active cell or anchor."""
        controller.click("A1")
        selection = controller.ctrl_click("C3")
        assert selection.range == ("A1", "C3")
        assert selection.active_cell == "A1"
        assert selection.anchor == "A1"

    def test_ctrl_click_is_idempotent(self, controller):
        """Test ctrl-clicking a selected cell changes nothing."""
        controller.click("A1")
        controller.ctrl_click("B2")
        before = controller.selection
        assert controller.ctrl_click("B2") is before
        assert controller.ctrl_click("A1") is before

    def test_shift_click_builds_rectangle(self, controller):
        """Test click A1 then shift-click C3 selects nine cells."""
        controller.click("A1")
        selection = controller.shift_click("C3")
        assert selection.range == ("A1", "B1", "C1", "A2", "B2", "C2", "A3", "B3", "C3")
        assert selection.active_cell == "A1"
        assert selection.anchor == "A1"

    def test_shift_click_upwards(self, controller):
        """Test shift-click above and left of the anchor."""
        controller.click("C3")
        selection = controller.shift_click("B2")
        assert selection.range == ("B2", "C2", "B3", "C3")
        assert selection.active_cell == "C3"

    def test_shift_click_uses_first_range_cell(self, controller):
        """Test the rectangle is measured from the first cell of the range."""
        controller.click("C3")
        controller.shift_click("A1")
        selection = controller.shift_click("B1")
        assert selection.range == ("A1", "B1")
        # C3 fell outside, so the active cell moves to the origin corner
        assert selection.active_cell == "A1"
        assert selection.active_cell in selection.range

    def test_shift_click_after_ctrl_click(self, controller):
        """Test shift-click replaces a scattered selection with a rectangle."""
        controller.click("A1")
        controller.ctrl_click("D4")
        selection = controller.shift_click("B2")
        assert selection.range == ("A1", "B1", "A2", "B2")


class TestDrag:
    """Test pointer drag selection."""

    def test_drag_extends_rectangle(self, controller):
        """Test dragging from B2 to C4 selects the rectangle."""
        controller.pointer_down("B2")
        assert controller.dragging
        assert controller.pointer_move("C4")
        assert controller.selection.range == ("B2", "C2", "B3", "C3", "B4", "C4")
        assert controller.selection.active_cell == "B2"

    def test_drag_shrinks_back(self, controller):
        """Test moving back toward the anchor shrinks the range."""
        controller.pointer_down("B2")
        controller.pointer_move("D4")
        controller.pointer_move("B3")
        assert controller.selection.range == ("B2", "B3")

    def test_same_cell_move_is_ignored(self, controller):
        """Test repeated moves within one cell report no change."""
        controller.pointer_down("B2")
        assert controller.pointer_move("C2")
        assert not controller.pointer_move("C2")

    def test_move_without_drag(self, controller):
        """Test moves do nothing when no button is held."""
        controller.click("A1")
        assert not controller.pointer_move("C3")
        assert controller.selection.range == ("A1",)

    def test_pointer_up_ends_drag(self, controller):
        """Test release clears the drag state."""
        controller.pointer_down("A1")
        controller.pointer_move("B2")
        controller.pointer_up()
        assert not controller.dragging
        assert controller.drag_anchor is None
        assert not controller.pointer_move("C3")
        assert controller.selection.range == ("A1", "B1", "A2", "B2")

    def test_non_left_button_ignored(self, controller):
        """Test right-button presses neither select nor drag."""
        controller.click("A1")
        controller.pointer_down("C3", button=2)
        assert not controller.dragging
        assert controller.selection.active_cell == "A1"

    def test_modifier_pointer_down(self, controller):
        """Test mouse-down honours ctrl and shift."""
        controller.pointer_down("A1")
        controller.pointer_up()
        controller.pointer_down("C1", ctrl=True)
        assert controller.selection.range == ("A1", "C1")
        controller.pointer_up()
        controller.pointer_down("B2", shift=True)
        assert controller.selection.range == ("A1", "B1", "A2", "B2")


class TestNavigation:
    """Test keyboard navigation."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("ArrowUp", "B1"),
            ("ArrowDown", "B3"),
            ("ArrowLeft", "A2"),
            ("ArrowRight", "C2"),
            ("Enter", "B3"),
            ("Tab", "C2"),
        ],
    )
    def test_moves(self, controller, key, expected):
        """Test each navigation key moves one step."""
        controller.click("B2")
        selection = controller.navigate(key)
        assert selection == Selection(active_cell=expected, range=[expected], anchor=expected)

    def test_clamps_at_origin(self, controller):
        """Test Up and Left stop at row 1 and column A."""
        controller.click("A1")
        assert controller.navigate("ArrowUp").active_cell == "A1"
        assert controller.navigate("ArrowLeft").active_cell == "A1"

    def test_column_wrap_z_to_aa(self, controller):
        """Test ArrowRight from Z1 reaches AA1."""
        controller.click("Z1")
        assert controller.navigate("ArrowRight").active_cell == "AA1"

    def test_unbounded_by_default(self, controller):
        """Test Down and Right keep growing without limits."""
        controller.click("ZZ1000")
        assert controller.navigate("ArrowDown").active_cell == "ZZ1001"
        assert controller.navigate("ArrowRight").active_cell == "AAA1001"

    def test_configured_limits(self):
        """Test Down and Right clamp at the configured extent."""
        controller = SelectionController(max_rows=3, max_columns=2)
        controller.click("B3")
        assert controller.navigate("ArrowDown").active_cell == "B3"
        assert controller.navigate("ArrowRight").active_cell == "B3"

    def test_navigation_collapses_range(self, controller):
        """Test arrow keys replace a multi-cell range with one cell."""
        controller.click("A1")
        controller.shift_click("C3")
        selection = controller.navigate("ArrowDown")
        assert selection.range == ("A2",)

    def test_non_navigation_key(self, controller):
        """Test other keys are not navigation."""
        assert controller.navigate("Home") is None


class TestHandleKey:
    """Test key interpretation."""

    def test_tab_prevents_default(self, controller):
        """Test Tab navigates and suppresses focus traversal."""
        action = controller.handle_key("Tab")
        assert action.kind is KeyActionKind.NAVIGATE
        assert action.prevent_default
        assert action.cell_id == "B1"

    def test_f2_starts_edit(self, controller):
        """Test F2 starts editing the active cell."""
        controller.click("B2")
        action = controller.handle_key("F2")
        assert action.kind is KeyActionKind.START_EDIT
        assert action.cell_id == "B2"
        assert action.seed_text is None

    def test_printable_starts_edit_without_seed(self, controller):
        """Test typing starts an edit but the key is not forwarded by default."""
        action = controller.handle_key("x")
        assert action.kind is KeyActionKind.START_EDIT
        assert action.seed_text is None
        assert not action.prevent_default

    def test_printable_forwarded_when_enabled(self):
        """Test the typed key seeds the buffer when configured."""
        controller = SelectionController(forward_typed_character=True)
        action = controller.handle_key("7")
        assert action.seed_text == "7"

    def test_ctrl_character_does_not_edit(self, controller):
        """Test ctrl or meta chords do not start editing."""
        assert controller.handle_key("c", ctrl=True).kind is KeyActionKind.IGNORED
        assert controller.handle_key("v", meta=True).kind is KeyActionKind.IGNORED

    def test_editing_only_enter_and_escape(self, controller):
        """Test navigation is suppressed while editing."""
        controller.click("B2")
        assert controller.handle_key("ArrowDown", editing=True).kind is KeyActionKind.IGNORED
        assert controller.handle_key("Tab", editing=True).kind is KeyActionKind.IGNORED
        assert controller.handle_key("x", editing=True).kind is KeyActionKind.IGNORED
        assert controller.selection.active_cell == "B2"

        assert controller.handle_key("Enter", editing=True).kind is KeyActionKind.COMMIT_EDIT
        assert controller.handle_key("Escape", editing=True).kind is KeyActionKind.CANCEL_EDIT
        assert controller.selection.active_cell == "B2"

    def test_unknown_key_ignored(self, controller):
        """Test unhandled keys are ignored."""
        assert controller.handle_key("Shift").kind is KeyActionKind.IGNORED
        assert controller.handle_key("Escape").kind is KeyActionKind.IGNORED

    def test_reset(self, controller):
        """Test reset restores the default selection and ends drags."""
        controller.pointer_down("C3")
        controller.reset()
        assert controller.selection == Selection()
        assert not controller.dragging
