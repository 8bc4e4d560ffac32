"""
Module: common.field_catalog

Purpose:
    Static catalog of data fields that elements can bind to. The keys are
    the paths the external rendering engine receives in its template
    context. The catalog feeds editor pickers only; the compiler treats
    every binding opaquely and never validates against it.

Key Functions:
    - all_fields(): Flat list of every catalog field
    - field_by_key(): Look up a field by its dotted key
    - item_column(): Look up an item-table column by key

Used By:
    - designer.defaults: default bindings for new elements
    - scripts.compile_design: field listing
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DataField:
    """A bindable data field (e.g. ``company.name``)."""

    key: str
    label: str
    example: str
    format: Optional[str] = None  # text | currency | number | date


@dataclass(frozen=True)
class DataFieldCategory:
    """A named group of fields shown together in the picker."""

    name: str
    fields: tuple[DataField, ...]


@dataclass(frozen=True)
class ItemColumnSpec:
    """A column available for the items table."""

    key: str
    label: str
    default_width: float
    align: str
    format: str = "text"


DATA_FIELD_CATALOG: tuple[DataFieldCategory, ...] = (
    DataFieldCategory("Company", (
        DataField("company.name", "Company Name", "Acme Trading Co."),
        DataField("company.address", "Full Address", "123 Main St, City"),
        DataField("company.address_line1", "Address Line 1", "123 Main Street"),
        DataField("company.address_line2", "Address Line 2", "Near Market Road"),
        DataField("company.city", "City", "Mumbai"),
        DataField("company.state", "State", "Maharashtra"),
        DataField("company.pincode", "Pincode", "400001"),
        DataField("company.phone", "Phone", "+91 98765 43210"),
        DataField("company.email", "Email", "info@acme.com"),
        DataField("company.website", "Website", "www.acme.com"),
        DataField("company.gstin", "GSTIN", "27AABCU9603R1ZM"),
        DataField("company.pan", "PAN", "AABCU9603R"),
    )),
    DataFieldCategory("Party", (
        DataField("party.name", "Party Name", "John Electronics"),
        DataField("party.address", "Party Address", "456 Market Road"),
        DataField("party.phone", "Party Phone", "+91 99887 76655"),
        DataField("party.email", "Party Email", "john@example.com"),
        DataField("party.gstin", "Party GSTIN", "29AADCB2230M1ZP"),
    )),
    DataFieldCategory("Invoice", (
        DataField("voucher_no", "Invoice Number", "INV-2024-001"),
        DataField("voucher_date", "Invoice Date", "2024-01-15", "date"),
        DataField("reference", "Reference", "PO-12345"),
        DataField("narration", "Notes/Narration", "Payment due in 30 days"),
    )),
    DataFieldCategory("Totals", (
        DataField("subtotal", "Subtotal", "10,000.00", "currency"),
        DataField("discount_amount", "Discount", "500.00", "currency"),
        DataField("discount_rate", "Discount %", "5", "number"),
        DataField("tax_total", "Total Tax", "1,710.00", "currency"),
        DataField("grand_total", "Grand Total", "11,210.00", "currency"),
        DataField("grand_total_words", "Amount in Words", "Eleven Thousand Two Hundred Ten Rupees"),
    )),
    DataFieldCategory("Balance", (
        DataField("old_balance", "Old Balance", "5,000.00", "currency"),
        DataField("total_balance", "Total Balance", "16,210.00", "currency"),
        DataField("paid_amount", "Paid Amount", "3,000.00", "currency"),
        DataField("balance_due", "Balance Due", "13,210.00", "currency"),
    )),
    DataFieldCategory("Bank", (
        DataField("bank.name", "Bank Name", "State Bank of India"),
        DataField("bank.account_no", "Account Number", "1234567890"),
        DataField("bank.ifsc", "IFSC Code", "SBIN0001234"),
        DataField("bank.branch", "Branch", "Main Branch"),
    )),
    DataFieldCategory("Other", (
        DataField("terms_and_conditions", "Terms & Conditions", "Goods once sold will not be returned"),
    )),
)

ITEM_TABLE_COLUMNS: tuple[ItemColumnSpec, ...] = (
    ItemColumnSpec("serial_no", "S.No", 5, "center"),
    ItemColumnSpec("product_name", "Product Name", 25, "left"),
    ItemColumnSpec("description", "Description", 15, "left"),
    ItemColumnSpec("hsn_code", "HSN/SAC", 8, "center"),
    ItemColumnSpec("initial_quantity", "Qty", 7, "right", "number"),
    ItemColumnSpec("count", "Count", 7, "right", "number"),
    ItemColumnSpec("less_quantity", "Deduction", 8, "right", "number"),
    ItemColumnSpec("final_quantity", "Final Qty", 8, "right", "number"),
    ItemColumnSpec("rate", "Rate", 10, "right", "currency"),
    ItemColumnSpec("amount", "Amount", 10, "right", "currency"),
    ItemColumnSpec("tax_rate", "Tax %", 6, "center", "number"),
    ItemColumnSpec("tax_amount", "Tax Amt", 8, "right", "currency"),
    ItemColumnSpec("total", "Total", 10, "right", "currency"),
)


def all_fields() -> list[DataField]:
    """Get all fields as a flat list, in catalog order."""
    return [f for category in DATA_FIELD_CATALOG for f in category.fields]


def field_by_key(key: str) -> Optional[DataField]:
    """Find a field by its key, or None if the key is not catalogued."""
    for f in all_fields():
        if f.key == key:
            return f
    return None


def item_column(key: str) -> Optional[ItemColumnSpec]:
    """Find an item-table column spec by key."""
    for spec in ITEM_TABLE_COLUMNS:
        if spec.key == key:
            return spec
    return None
