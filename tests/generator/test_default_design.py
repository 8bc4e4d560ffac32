"""
Tests for generator.default_design

Test Coverage:
- Wide (A4) sequence and flag gating
- Receipt sequence
- Cursor monotonicity, geometry minimums, id uniqueness
- Compiling generated designs
"""

import pytest

from invoice_designer.compiler import LayoutMode, Region, compile_design, partition_regions
from invoice_designer.core.models import ElementKind
from invoice_designer.core.utils.serialization import export_design, import_design
from invoice_designer.generator import FeatureFlags, generate_default_design, generate_for_format


def _labels(design):
    return [el.label for el in design.elements]


@pytest.fixture
def wide_flags() -> FeatureFlags:
    """Everything on except logo and GSTIN."""
    return FeatureFlags(
        show_logo=False,
        show_company_address=True,
        show_party_address=True,
        show_gstin=False,
        show_item_hsn=True,
        show_bank_details=True,
        show_signature=True,
        show_terms=True,
        show_less_column=True,
    )


class TestWideDesign:
    def test_generate_when_logo_and_gstin_off_then_documented_sequence(self, wide_flags):
        design = generate_default_design(wide_flags, 210)

        assert _labels(design) == [
            "Company Name",
            "Company Address",
            "Company Phone",
            "Divider",
            "Invoice Number",
            "Invoice Date",
            "Bill To Label",
            "Customer Name",
            "Customer Address",
            "Divider",
            "Items Table",
            "Totals",
            "Bank Details",
            "Terms & Conditions",
            "Signature",
        ]

    def test_generate_when_wide_then_cursor_strictly_increases_except_pair(self, wide_flags):
        design = generate_default_design(wide_flags, 210)
        ys = [el.y for el in design.elements]
        pair = [el.y for el in design.elements if el.field_binding in ("voucher_no", "voucher_date")]

        assert pair[0] == pair[1]
        distinct = [y for i, y in enumerate(ys) if i == 0 or y != ys[i - 1]]
        assert distinct == sorted(distinct)
        assert len(distinct) == len(set(distinct)) == len(ys) - 1

    def test_generate_when_all_flags_then_logo_beside_company_name(self):
        design = generate_default_design(FeatureFlags.all_enabled(), 210)

        logo, name = design.elements[0], design.elements[1]
        assert logo.kind == ElementKind.IMAGE and logo.image_type == "logo"
        assert name.y == logo.y
        assert name.x == logo.x + 35
        assert any(el.field_binding == "company.gstin" for el in design.elements)

    def test_generate_when_hsn_and_less_then_extra_columns(self, wide_flags):
        design = generate_default_design(wide_flags, 210)
        table = next(el for el in design.elements if el.kind == ElementKind.TABLE)

        keys = [c.key for c in table.table_config.columns]
        assert "hsn_code" in keys
        assert "less_quantity" in keys
        assert keys[0] == "serial_no"

    def test_generate_when_wide_then_columns_bind_raw_item_fields(self, wide_flags):
        """Generated columns carry no format, so cells bind the raw item value."""
        design = generate_default_design(wide_flags, 210)
        table = next(el for el in design.elements if el.kind == ElementKind.TABLE)

        assert all(c.format is None for c in table.table_config.columns)
        body = compile_design(design).body_html
        assert "{{rate}}" in body
        assert "{{format_currency rate}}" not in body

    def test_generate_when_no_flags_then_minimal_sequence(self):
        design = generate_default_design(FeatureFlags(), 210)

        table = next(el for el in design.elements if el.kind == ElementKind.TABLE)
        assert "hsn_code" not in [c.key for c in table.table_config.columns]
        assert len(design.elements) == 8
        assert design.page_size.width == 210

    def test_generate_when_wide_then_regions_split_at_table_and_totals(self):
        design = generate_default_design(FeatureFlags.all_enabled(), 210)

        partition = partition_regions(design.elements)

        assert len(partition.header) == 12
        assert [el.kind for el in partition.body] == [ElementKind.TABLE, ElementKind.TOTALS]
        assert [el.label for el in partition.footer] == ["Bank Details", "Terms & Conditions", "Signature"]


class TestReceiptDesign:
    def test_generate_when_narrow_then_receipt_layout(self):
        design = generate_default_design(FeatureFlags(show_party_address=True), 80)

        assert design.page_size.width == 80
        assert "Courier New" in design.global_styles.font_family
        assert design.elements[0].field_binding == "company.name"
        assert design.elements[-1].content == "Visit Again!"
        assert any(el.content == "Customer: " for el in design.elements)

    def test_generate_when_less_column_then_receipt_table_has_less(self):
        design = generate_default_design(FeatureFlags(show_less_column=True), 58)

        table = next(el for el in design.elements if el.kind == ElementKind.TABLE)
        assert [c.key for c in table.table_config.columns] == [
            "product_name", "initial_quantity", "less_quantity", "rate", "total",
        ]
        assert table.width == 52

    def test_generate_when_receipt_compiled_then_flow_with_thank_you_footer(self):
        design = generate_default_design(FeatureFlags.all_enabled("thermal_80mm"), 80)

        compiled = compile_design(design)

        assert compiled.mode == LayoutMode.FLOW
        assert "Thank You for Your Business!" in compiled.footer_html
        assert "{{format_date voucher_date}}" in compiled.header_html
        assert "Bal Due:" in compiled.body_html


class TestGeneratorInvariants:
    @pytest.mark.parametrize("width", [58, 80, 210, 297])
    def test_generate_when_any_width_then_unique_ids_and_minimum_sizes(self, width):
        design = generate_default_design(FeatureFlags.all_enabled(), width)

        ids = [el.id for el in design.elements]
        assert len(ids) == len(set(ids))
        assert all(el.width >= 3 and el.height >= 3 for el in design.elements)
        assert all(el.x >= 0 and el.y >= 0 for el in design.elements)

    def test_generate_when_called_twice_then_ids_differ(self):
        a = generate_default_design(FeatureFlags(), 210)
        b = generate_default_design(FeatureFlags(), 210)

        assert not {el.id for el in a.elements} & {el.id for el in b.elements}

    def test_generate_when_exported_then_round_trips(self):
        design = generate_default_design(FeatureFlags.all_enabled(), 210)

        assert import_design(export_design(design), strict=True) == design

    def test_generate_for_format_when_thermal_58_then_preset_page(self):
        design = generate_for_format(FeatureFlags(template_format="thermal_58mm"))

        assert design.page_size.width == 58
        assert compile_design(design).mode == LayoutMode.FLOW

    def test_generate_for_format_when_landscape_then_absolute(self):
        design = generate_for_format(FeatureFlags(template_format="a4_landscape"))

        assert design.page_size.width == 297
        assert partition_regions(design.elements).region_of(design.elements[-1].id) == Region.BODY


class TestFeatureFlags:
    def test_from_dict_when_ints_then_bools(self):
        flags = FeatureFlags.from_dict({"template_format": "thermal_80mm", "show_logo": 1, "show_gstin": 0})

        assert flags.show_logo is True
        assert flags.show_gstin is False
        assert flags.show_terms is False
        assert flags.template_format == "thermal_80mm"

    def test_to_dict_when_round_tripped_then_equal(self):
        flags = FeatureFlags.all_enabled("a4_landscape")

        assert FeatureFlags.from_dict(flags.to_dict()) == flags
