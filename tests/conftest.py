import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import invoice_designer
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from invoice_designer.core.models import (  # noqa: E402
    Design,
    Element,
    ElementKind,
    Margins,
    PageSetup,
    TableColumn,
    TableConfig,
    TotalsConfig,
    TotalsRow,
    create_blank_design,
)
from invoice_designer.designer import DesignerSession  # noqa: E402


# Common test fixtures
@pytest.fixture
def a4_page() -> PageSetup:
    return PageSetup(210, 297, Margins(10, 10, 10, 10))


@pytest.fixture
def receipt_page() -> PageSetup:
    return PageSetup(80, 200, Margins(3, 3, 3, 3))


@pytest.fixture
def session() -> DesignerSession:
    """Fresh editing session on a blank A4 design."""
    return DesignerSession(create_blank_design("a4_portrait"))


@pytest.fixture
def table_config() -> TableConfig:
    return TableConfig(
        columns=(
            TableColumn("serial_no", "S.No", 6, "center"),
            TableColumn("product_name", "Description", 34, "left"),
            TableColumn("initial_quantity", "Qty", 8, "right", "number"),
            TableColumn("rate", "Rate", 12, "right", "currency"),
            TableColumn("supply_date", "Supplied", 12, "center", "date"),
        ),
        border_style="full",
    )


@pytest.fixture
def totals_config() -> TotalsConfig:
    return TotalsConfig(
        rows=(
            TotalsRow("Subtotal", "subtotal", "currency"),
            TotalsRow("Discount", "discount_amount", "currency"),
            TotalsRow("Grand Total", "grand_total", "currency", bold=True),
            TotalsRow("In Words", "grand_total_words", "text"),
        ),
        label_align="right",
        show_border=True,
    )


@pytest.fixture
def make_sample_design(table_config, totals_config):
    """
    Factory for the canonical four-element layout:
    text (y=10), table (y=50), totals (y=90), text (y=120).
    """

    def _make(page: PageSetup, order: tuple[int, ...] = (0, 1, 2, 3)) -> Design:
        elements = (
            Element("title", ElementKind.TEXT, 10, 10, 80, 8, content="Tax Invoice", z_index=1),
            Element("items", ElementKind.TABLE, 10, 50, 150, 30, table_config=table_config, z_index=2),
            Element("totals", ElementKind.TOTALS, 100, 90, 60, 20, totals_config=totals_config, z_index=3),
            Element("thanks", ElementKind.TEXT, 10, 120, 80, 8, content="Thank you", z_index=4),
        )
        return Design(page_size=page, elements=tuple(elements[i] for i in order))

    return _make
