"""
Unit Tests for Design Models

Tests for page geometry, element payloads, style merging and the Design
aggregate.
"""

import pytest
from dataclasses import FrozenInstanceError

from invoice_designer.core.models import (
    DESIGN_VERSION,
    Design,
    Element,
    ElementKind,
    ElementStyles,
    GlobalStyles,
    Margins,
    PageSetup,
    TableConfig,
    TotalsConfig,
    create_blank_design,
    page_preset,
    page_setup_for_width,
)


class TestPageSetup:
    """Tests for PageSetup and presets."""

    def test_content_width_when_margins_given_then_excludes_them(self):
        """content_width is width minus left and right margins."""
        page = PageSetup(80, 200, Margins(3, 4, 3, 5))

        assert page.content_width == 71

    def test_init_when_width_not_positive_then_raises(self):
        """Zero width is rejected."""
        with pytest.raises(ValueError, match="width"):
            PageSetup(0, 297)

    def test_init_when_margins_exceed_width_then_raises(self):
        """Margins wider than the page are rejected."""
        with pytest.raises(ValueError, match="Margins"):
            PageSetup(20, 297, Margins(10, 10, 10, 10))

    def test_margins_when_negative_then_raises(self):
        """Negative margins are rejected."""
        with pytest.raises(ValueError):
            Margins(top=-1)

    def test_is_narrow_when_receipt_width_then_true(self):
        """Receipt widths are narrow, page widths are not."""
        assert page_preset("thermal_80mm").is_narrow
        assert page_preset("thermal_58mm").is_narrow
        assert not page_preset("a4_portrait").is_narrow

    def test_page_preset_when_unknown_then_a4(self):
        """Unknown preset names fall back to A4 portrait."""
        assert page_preset("letter") == page_preset("a4_portrait")

    def test_page_setup_for_width_when_preset_width_then_returns_preset(self):
        """A preset width returns that preset."""
        assert page_setup_for_width(80) == page_preset("thermal_80mm")

    def test_page_setup_for_width_when_unusual_narrow_width_then_synthesized(self):
        """Unlisted narrow widths get receipt height and margins."""
        page = page_setup_for_width(100)

        assert page.width == 100
        assert page.height == 200
        assert page.margins == Margins(3, 3, 3, 3)

    def test_merged_when_partial_margins_then_other_sides_kept(self):
        """Margins can be merged one side at a time."""
        page = page_preset("a4_portrait").merged({"margins": {"left": 20}})

        assert page.margins.left == 20
        assert page.margins.right == 10


class TestElementStyles:
    """Tests for style merging and resolution."""

    def test_merged_when_camel_case_key_then_applied(self):
        """Wire-format keys are accepted."""
        styles = ElementStyles().merged({"fontSize": 12, "text_align": "center"})

        assert styles.font_size == 12
        assert styles.text_align == "center"

    def test_merged_when_unknown_key_then_dropped(self, caplog):
        """Unknown keys are ignored with a warning."""
        styles = ElementStyles().merged({"blink": True})

        assert styles == ElementStyles()
        assert "blink" in caplog.text

    def test_resolve_when_unset_then_inherits_globals(self):
        """Unset family/size/colour come from the global styles."""
        resolved = ElementStyles(font_size=14).resolve(GlobalStyles())

        assert resolved.font_size == 14
        assert resolved.font_family == GlobalStyles().font_family
        assert resolved.color == "#000000"

    def test_to_dict_when_sparse_then_only_set_fields(self):
        """Only set fields are serialized, with camelCase keys."""
        assert ElementStyles(background_color="#fff").to_dict() == {"backgroundColor": "#fff"}


class TestElement:
    """Tests for Element."""

    def test_element_when_modified_then_raises(self):
        """Elements are immutable."""
        el = Element("a", ElementKind.TEXT, 0, 0, 10, 10)

        with pytest.raises(FrozenInstanceError):
            el.x = 5

    def test_with_changes_when_styles_mapping_then_replaces_bundle(self):
        """A styles mapping is converted to ElementStyles."""
        el = Element("a", ElementKind.TEXT, 0, 0, 10, 10, styles=ElementStyles(font_size=9))

        updated = el.with_changes({"styles": {"color": "#f00"}, "content": "Hi"})

        assert updated.styles == ElementStyles(color="#f00")
        assert updated.content == "Hi"
        assert el.content is None

    def test_with_changes_when_camel_case_keys_then_applied(self):
        """Wire keys are accepted alongside attribute names."""
        el = Element("a", ElementKind.FIELD, 0, 0, 10, 10, field_binding="company.name")

        updated = el.with_changes({"fieldBinding": "party.name", "zIndex": 4, "type": "text"})

        assert updated.field_binding == "party.name"
        assert updated.z_index == 4
        assert updated.kind == ElementKind.TEXT

    def test_with_changes_when_table_config_mapping_then_merged_config(self, table_config):
        """A partial table config mapping is merged into a TableConfig."""
        el = Element("t", ElementKind.TABLE, 0, 0, 100, 40, table_config=table_config)

        updated = el.with_changes({"table_config": {"showHeader": False, "borderStyle": "none"}})

        assert isinstance(updated.table_config, TableConfig)
        assert updated.table_config.show_header is False
        assert updated.table_config.border_style == "none"
        assert updated.table_config.columns == table_config.columns

    def test_with_changes_when_totals_config_wire_key_then_converted(self):
        el = Element("s", ElementKind.TOTALS, 0, 0, 80, 40)

        updated = el.with_changes({"totalsConfig": {"rows": [{"label": "Total", "field": "grand_total"}]}})

        assert isinstance(updated.totals_config, TotalsConfig)
        assert updated.totals_config.rows[0].field == "grand_total"

    def test_to_dict_when_field_then_camel_case_payload(self):
        """Payload keys use the persisted document names."""
        el = Element("f", ElementKind.FIELD, 1, 2, 30, 5, field_binding="party.name", z_index=3)

        d = el.to_dict()

        assert d["type"] == "field"
        assert d["fieldBinding"] == "party.name"
        assert d["zIndex"] == 3
        assert "tableConfig" not in d

    def test_from_dict_when_visible_missing_then_visible(self):
        """Elements default to visible and unlocked."""
        el = Element.from_dict({"id": "x", "type": "shape", "x": 0, "y": 0, "width": 5, "height": 5})

        assert el.visible is True
        assert el.locked is False

    def test_from_dict_when_unknown_type_then_raises(self):
        """Unknown kinds are rejected."""
        with pytest.raises(ValueError):
            Element.from_dict({"id": "x", "type": "video"})


class TestDesign:
    """Tests for the Design aggregate."""

    def test_create_blank_design_when_called_then_empty_version_1(self):
        """Blank designs have no elements and the current version."""
        design = create_blank_design()

        assert design.elements == ()
        assert design.version == DESIGN_VERSION == 1

    def test_max_z_index_when_empty_then_zero(self):
        """An empty design has max z-index 0."""
        assert create_blank_design().max_z_index == 0

    def test_with_element_mapped_when_edit_then_other_elements_shared(self):
        """Unchanged elements are the same objects in the new design."""
        a = Element("a", ElementKind.TEXT, 0, 0, 10, 10)
        b = Element("b", ElementKind.TEXT, 0, 20, 10, 10)
        design = Design(page_size=page_preset("a4_portrait"), elements=(a, b))

        updated = design.with_element_mapped("a", lambda el: el.with_changes({"x": 5}))

        assert updated.elements[1] is b
        assert updated.find("a").x == 5
        assert design.find("a").x == 0

    def test_visible_elements_when_hidden_present_then_excluded(self):
        """Hidden elements are not part of visible_elements."""
        a = Element("a", ElementKind.TEXT, 0, 0, 10, 10, visible=False)
        design = Design(page_size=page_preset("a4_portrait"), elements=(a,))

        assert design.visible_elements == ()
