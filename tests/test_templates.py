from __future__ import annotations

import pytest

from app.errors import TemplateMissing
from app.services.templates import UNSPECIFIED_DELIVERY_DATE, TemplateRenderer, format_order_lines
from app.types import Order, OrderLine


def make_order(**overrides) -> Order:
    fields = dict(
        id="po-1",
        po_number="PO-100",
        supplier_id="sup-1",
        expected_delivery_date="2026-10-25",
        lines=(OrderLine(product_name="Implant A", quantity=2, ref_code="IA-1"),),
    )
    fields.update(overrides)
    return Order(**fields)


def test_renders_requested_category() -> None:
    renderer = TemplateRenderer({"urgent": "PO {po_number}: {items}"})
    assert renderer.render("urgent", make_order()) == "PO PO-100: 1. Implant A x2 (IA-1)"


def test_missing_category_falls_back_to_default() -> None:
    templates = {"normal_order": "Order {po_number} due {delivery_date}"}
    renderer = TemplateRenderer(templates)
    order = make_order()

    assert renderer.render("order_reminder", order) == renderer.render("normal_order", order)
    assert renderer.render("order_reminder", order) == "Order PO-100 due 2026-10-25"


def test_empty_template_falls_back_to_default() -> None:
    renderer = TemplateRenderer({"urgent_order": "", "normal_order": "N {po_number}"})
    assert renderer.render("urgent_order", make_order()) == "N PO-100"


def test_no_template_and_no_default_raises() -> None:
    renderer = TemplateRenderer({"urgent_order": "U {po_number}"})
    with pytest.raises(TemplateMissing) as excinfo:
        renderer.render("order_reminder", make_order())
    assert excinfo.value.status_code == 500


def test_custom_default_category() -> None:
    renderer = TemplateRenderer({"order_reminder": "R {po_number}"}, default_category="order_reminder")
    assert renderer.render("nope", make_order()) == "R PO-100"


def test_unknown_placeholders_are_kept() -> None:
    renderer = TemplateRenderer({"normal_order": "{po_number} for {supplier_name} {}"})
    assert renderer.render("normal_order", make_order()) == "PO-100 for {supplier_name} {}"


def test_missing_delivery_date_uses_sentinel() -> None:
    renderer = TemplateRenderer({"normal_order": "due {delivery_date}"})
    rendered = renderer.render("normal_order", make_order(expected_delivery_date=None))
    assert rendered == f"due {UNSPECIFIED_DELIVERY_DATE}"
    assert UNSPECIFIED_DELIVERY_DATE == "ไม่ระบุ"


def test_every_occurrence_is_replaced() -> None:
    renderer = TemplateRenderer({"normal_order": "{po_number} / {po_number}"})
    assert renderer.render("normal_order", make_order()) == "PO-100 / PO-100"


def test_substituted_values_are_not_reexpanded() -> None:
    order = make_order(po_number="{items}")
    renderer = TemplateRenderer({"normal_order": "{po_number}"})
    assert renderer.render("normal_order", order) == "{items}"


def test_item_lines_are_numbered_with_dash_for_missing_ref() -> None:
    lines = (
        OrderLine(product_name="Implant A", quantity=2, ref_code="IA-1"),
        OrderLine(product_name="Healing Cap", quantity=5),
    )
    assert format_order_lines(lines) == "1. Implant A x2 (IA-1)\n2. Healing Cap x5 (-)"


def test_order_without_lines_renders_empty_items() -> None:
    renderer = TemplateRenderer({"normal_order": "[{items}]"})
    assert renderer.render("normal_order", make_order(lines=())) == "[]"
