"""
Tests for designer.state.DesignerSession

Test Coverage:
- add/update/delete/duplicate elements, z-order
- selection, zoom, grid
- load/get design, dirty flag
- undo/redo over structural operations
"""

import pytest

from invoice_designer.compiler import compile_design
from invoice_designer.core.models import ElementKind, TableConfig, create_blank_design
from invoice_designer.designer import DesignerSession


class TestAddElement:
    def test_add_when_text_then_centred_below_top_margin(self, session):
        """New elements are centred in the content area, 10mm below the top margin."""
        element_id = session.add_element("text")

        el = session.design.find(element_id)
        assert el.kind == ElementKind.TEXT
        assert (el.width, el.height) == (80, 8)
        assert el.x == 10 + (190 - 80) / 2
        assert el.y == 20
        assert el.content == "Text Label"

    def test_add_when_called_then_selected_dirty_and_undoable(self, session):
        element_id = session.add_element("field")

        assert session.selected_ids == (element_id,)
        assert session.is_dirty
        assert session.can_undo

    def test_add_when_table_then_starter_columns(self, session):
        """Tables always carry a configuration once created."""
        el = session.design.find(session.add_element(ElementKind.TABLE))

        assert el.table_config is not None
        assert [c.key for c in el.table_config.columns][:2] == ["serial_no", "product_name"]
        assert len(el.table_config.columns) == 8

    def test_add_when_overrides_given_then_overrides_win(self, session):
        el = session.design.find(session.add_element("text", {"content": "Hello", "x": 0, "label": "Greeting"}))

        assert el.content == "Hello"
        assert el.x == 0
        assert el.label == "Greeting"

    def test_add_when_tiny_override_then_clamped_to_minimum(self, session):
        el = session.design.find(session.add_element("shape", {"width": 1, "height": 0.5}))

        assert el.width == 3
        assert el.height == 3

    def test_add_when_narrow_page_then_width_capped_to_content(self):
        session = DesignerSession(create_blank_design("thermal_80mm"))

        el = session.design.find(session.add_element("table"))

        assert el.width == 74
        assert el.x == 3

    def test_add_when_repeated_then_z_index_increases(self, session):
        first = session.add_element("text")
        second = session.add_element("text")

        assert session.design.find(second).z_index == session.design.find(first).z_index + 1


class TestUpdateElement:
    def test_update_when_geometry_then_no_history(self, session):
        """Continuous edits do not create undo steps."""
        element_id = session.add_element("text")
        before = session.state

        session.update_element(element_id, {"x": 42, "y": 7})

        assert session.design.find(element_id).x == 42
        session.undo()
        assert session.design == create_blank_design("a4_portrait")
        assert before.design != session.design

    def test_update_when_resize_below_minimum_then_clamped(self, session):
        element_id = session.add_element("text")

        session.update_element(element_id, {"width": 0.1, "height": -2})

        el = session.design.find(element_id)
        assert (el.width, el.height) == (3, 3)

    def test_update_when_unknown_id_then_noop(self, session):
        session.update_element("missing", {"x": 1})
        session.update_element_styles("missing", {"color": "#f00"})

        assert session.design.elements == ()
        assert not session.is_dirty

    def test_update_styles_when_partial_then_merged(self, session):
        element_id = session.add_element("text")

        session.update_element_styles(element_id, {"fontWeight": "bold"})

        styles = session.design.find(element_id).styles
        assert styles.font_weight == "bold"
        assert styles.font_size == 10

    def test_update_when_table_config_partial_then_compiles(self, session):
        """A partial table config from an editor panel becomes a real TableConfig."""
        table_id = session.add_element("table")

        session.update_element(table_id, {"tableConfig": {"columns": [], "showHeader": False}})

        config = session.design.find(table_id).table_config
        assert isinstance(config, TableConfig)
        assert config.columns == ()
        assert "<thead>" not in compile_design(session.get_design()).body_html

    def test_update_when_camel_case_binding_then_applied(self, session):
        field_id = session.add_element("field")

        session.update_element(field_id, {"fieldBinding": "party.name"})

        assert session.design.find(field_id).field_binding == "party.name"

    @pytest.mark.parametrize("changes", [
        {"kind": "bogus"},
        {"width": None},
        {"table_config": {"columns": [{"label": "No key"}]}},
    ])
    def test_update_when_invalid_value_then_ignored(self, session, changes, caplog):
        """Invalid changes are logged and dropped, never raised."""
        element_id = session.add_element("table")
        before = session.get_design()

        session.update_element(element_id, changes)

        assert session.get_design() == before
        assert "Ignoring invalid change" in caplog.text

    def test_add_when_overrides_invalid_then_defaults_kept(self, session, caplog):
        element_id = session.add_element("text", {"kind": "bogus", "content": "x"})

        el = session.design.find(element_id)
        assert el.kind == ElementKind.TEXT
        assert el.content == "Text Label"
        assert "Ignoring invalid overrides" in caplog.text


class TestMoveAndResize:
    def test_move_when_snap_enabled_then_snapped(self, session):
        element_id = session.add_element("text")

        session.move_element(element_id, 12.4, 31)

        el = session.design.find(element_id)
        assert (el.x, el.y) == (10, 30)

    def test_move_when_snap_disabled_then_exact(self, session):
        element_id = session.add_element("text")
        session.toggle_snap_to_grid()

        session.move_element(element_id, 12.4, 31)

        assert session.design.find(element_id).x == 12.4

    def test_move_when_locked_then_unchanged(self, session):
        element_id = session.add_element("text", {"locked": True})
        before = session.design.find(element_id)

        session.move_element(element_id, 100, 100)
        session.resize_element(element_id, 50, 50)

        assert session.design.find(element_id) == before

    def test_resize_when_snapped_to_zero_then_minimum(self, session):
        element_id = session.add_element("text")

        session.resize_element(element_id, 12, 2)

        el = session.design.find(element_id)
        assert (el.width, el.height) == (10, 3)


class TestDeleteAndDuplicate:
    def test_delete_when_selected_then_removed_from_selection(self, session):
        element_id = session.add_element("text")

        session.delete_element(element_id)

        assert session.design.elements == ()
        assert session.selected_ids == ()

    def test_delete_selected_when_multiple_then_all_removed(self, session):
        a = session.add_element("text")
        b = session.add_element("field")
        c = session.add_element("shape")
        session.select_element(a)
        session.select_element(b, additive=True)

        session.delete_selected_elements()

        assert [el.id for el in session.elements] == [c]
        assert session.selected_ids == ()

    def test_delete_selected_when_selection_undone_then_noop(self, session):
        """After undoing an add, deleting the selection neither edits nor pushes history."""
        a = session.add_element("text")
        b = session.add_element("field")
        session.undo()
        session.mark_clean()

        session.delete_selected_elements()

        assert [el.id for el in session.elements] == [a]
        assert not session.is_dirty
        assert session.can_redo
        session.redo()
        assert [el.id for el in session.elements] == [a, b]

    def test_duplicate_when_labelled_then_offset_copy_selected(self, session):
        original_id = session.add_element("text")
        original = session.design.find(original_id)

        copy_id = session.duplicate_element(original_id)

        copy = session.design.find(copy_id)
        assert copy_id != original_id
        assert (copy.x, copy.y) == (original.x + 5, original.y + 5)
        assert copy.label == "Text (copy)"
        assert copy.z_index == original.z_index + 1
        assert copy.content == original.content
        assert session.selected_ids == (copy_id,)

    def test_duplicate_when_unlabelled_then_label_stays_empty(self, session):
        original_id = session.add_element("text", {"label": None})

        copy = session.design.find(session.duplicate_element(original_id))

        assert copy.label is None

    def test_duplicate_when_unknown_id_then_none(self, session):
        assert session.duplicate_element("missing") is None


class TestZOrder:
    def test_move_to_front_when_called_then_strictly_highest(self, session):
        ids = [session.add_element("shape") for _ in range(3)]

        session.move_element_to_front(ids[0])

        z = {el.id: el.z_index for el in session.elements}
        assert all(z[ids[0]] > z[other] for other in ids[1:])

    def test_move_to_back_when_called_then_zero_and_others_shifted(self, session):
        ids = [session.add_element("shape") for _ in range(3)]
        before = {el.id: el.z_index for el in session.elements}

        session.move_element_to_back(ids[2])

        after = {el.id: el.z_index for el in session.elements}
        assert after[ids[2]] == 0
        assert after[ids[0]] == before[ids[0]] + 1
        assert after[ids[1]] == before[ids[1]] + 1


class TestSelectionAndView:
    def test_select_when_additive_then_toggles(self, session):
        a = session.add_element("text")
        b = session.add_element("text")
        session.select_element(a)

        session.select_element(b, additive=True)
        assert set(session.selected_ids) == {a, b}

        session.select_element(a, additive=True)
        assert session.selected_ids == (b,)
        assert session.selected_element.id == b

    def test_select_when_not_additive_then_replaces(self, session):
        a = session.add_element("text")
        b = session.add_element("text")
        session.select_element(a)
        session.select_element(b, additive=True)

        session.select_element(a)

        assert session.selected_ids == (a,)

    def test_clear_selection_when_called_then_empty(self, session):
        session.add_element("text")

        session.clear_selection()

        assert session.selected_element is None

    @pytest.mark.parametrize("value,expected", [(0.1, 0.25), (3, 2.0), (1.3, 1.3), (-5, 0.25)])
    def test_set_zoom_when_out_of_range_then_clamped(self, session, value, expected):
        session.set_zoom(value)
        assert session.zoom == expected

    def test_toggle_grid_when_called_then_flips(self, session):
        assert session.show_grid
        session.toggle_grid()
        assert not session.show_grid

    def test_set_grid_size_when_non_positive_then_ignored(self, session):
        session.set_grid_size(0)
        assert session.grid_size == 5


class TestGlobalEdits:
    def test_update_global_styles_when_partial_then_merged_and_dirty(self, session):
        session.update_global_styles({"fontSize": 12})

        assert session.design.global_styles.font_size == 12
        assert session.design.global_styles.font_family == "Arial, sans-serif"
        assert session.is_dirty
        assert not session.can_undo

    def test_update_page_setup_when_invalid_then_ignored(self, session):
        before = session.design.page_size

        session.update_page_setup({"width": -1})

        assert session.design.page_size == before

    def test_update_page_setup_when_width_changed_then_applied(self, session):
        session.update_page_setup({"width": 80, "height": 200})

        assert session.design.page_size.width == 80
        assert session.design.page_size.margins.left == 10


class TestLoadAndHistory:
    def test_load_when_called_then_clean_unselected_no_history(self, session, make_sample_design, a4_page):
        session.add_element("text")
        design = make_sample_design(a4_page)

        session.load_design(design)

        assert session.get_design() == design
        assert session.selected_ids == ()
        assert not session.is_dirty
        assert not session.can_undo

    def test_mark_clean_when_dirty_then_clean_design_unchanged(self, session):
        session.add_element("text")
        design = session.get_design()

        session.mark_clean()

        assert not session.is_dirty
        assert session.get_design() == design

    def test_get_design_when_session_edited_later_then_snapshot_unchanged(self, session):
        """The returned design never observes later edits."""
        element_id = session.add_element("text")
        snapshot = session.get_design()

        session.update_element(element_id, {"x": 99})
        session.delete_element(element_id)

        assert snapshot.find(element_id).x != 99

    def test_undo_when_at_start_then_noop(self, session):
        session.undo()
        assert not session.is_dirty

    def test_undo_redo_when_structural_sequence_then_symmetric(self, session):
        """n undos followed by n redos restore the post-sequence design."""
        a = session.add_element("text")
        b = session.add_element("table")
        session.duplicate_element(a)
        session.move_element_to_back(b)
        session.delete_element(a)
        session.move_element_to_front(b)
        final = session.get_design()

        for _ in range(6):
            session.undo()
        assert session.design.elements == ()
        for _ in range(6):
            session.redo()

        assert session.get_design() == final
        assert not session.can_redo

    def test_undo_when_selected_element_removed_then_selection_pruned(self, session):
        """Undo/redo drop selected ids the restored snapshot lacks."""
        a = session.add_element("text")
        b = session.add_element("field")
        assert session.selected_ids == (b,)

        session.undo()
        assert session.selected_ids == ()

        session.select_element(a)
        session.redo()

        assert session.selected_ids == (a,)
        assert [el.id for el in session.elements] == [a, b]

    def test_undo_when_after_save_then_dirty(self, session):
        session.add_element("text")
        session.mark_clean()

        session.undo()

        assert session.is_dirty

    def test_history_when_over_capacity_then_oldest_lost(self):
        session = DesignerSession(create_blank_design(), history_capacity=5)
        for _ in range(8):
            session.add_element("shape")

        undos = 0
        while session.can_undo:
            session.undo()
            undos += 1

        assert undos == 4
        assert len(session.elements) == 4

    def test_subscribe_when_state_changes_then_notified(self, session):
        seen = []
        unsubscribe = session.subscribe(seen.append)

        session.add_element("text")
        unsubscribe()
        session.add_element("text")

        assert len(seen) == 1
        assert len(seen[0].design.elements) == 1
