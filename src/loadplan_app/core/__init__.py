"""Order ingestion and report helpers exposed at the package level."""

from .order_sheet import OrderSheetError, load_orders
from .report_text import render_report

__all__ = ["OrderSheetError", "load_orders", "render_report"]
