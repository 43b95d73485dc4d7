"""Render purchase-order announcements from the configured templates."""

from __future__ import annotations

import logging
import re
from typing import Mapping, Sequence

from app.errors import TemplateMissing
from app.types import DEFAULT_TEMPLATE_CATEGORY, Order, OrderLine, Placeholder

logger = logging.getLogger(__name__)

# Shown when an order has no expected delivery date ("not specified").
UNSPECIFIED_DELIVERY_DATE = "ไม่ระบุ"
MISSING_REF_CODE = "-"

_PLACEHOLDER_PATTERN = re.compile("|".join(re.escape(placeholder.value) for placeholder in Placeholder))


def format_order_lines(lines: Sequence[OrderLine]) -> str:
    """Return one numbered line per item: `1. Implant A x2 (IA-1)`."""
    return "\n".join(
        f"{index}. {line.product_name} x{line.quantity} ({line.ref_code or MISSING_REF_CODE})"
        for index, line in enumerate(lines, start=1)
    )


class TemplateRenderer:
    """Fill a message template with values taken from an order.

    Substitution is literal and limited to the `Placeholder` set; anything
    else in braces is kept as written. A category with no template (or an
    empty one) uses the default category's template instead. That fallback
    is policy, not an error, and is logged.
    """

    def __init__(
        self,
        templates: Mapping[str, str],
        default_category: str = DEFAULT_TEMPLATE_CATEGORY.value,
    ) -> None:
        self.templates = dict(templates)
        self.default_category = default_category

    def template_for(self, category: str) -> str:
        template = self.templates.get(category)
        if template:
            return template

        fallback = self.templates.get(self.default_category)
        if not fallback:
            raise TemplateMissing(
                f"no template for {category!r} nor default {self.default_category!r}"
            )
        logger.info(
            "Template category not configured, using default",
            extra={"category": category, "default_category": self.default_category},
        )
        return fallback

    def render(self, category: str, order: Order) -> str:
        values = {
            Placeholder.PO_NUMBER: order.po_number,
            Placeholder.ITEMS: format_order_lines(order.lines),
            Placeholder.DELIVERY_DATE: order.expected_delivery_date or UNSPECIFIED_DELIVERY_DATE,
        }
        template = self.template_for(category)
        return _PLACEHOLDER_PATTERN.sub(lambda match: values[Placeholder(match.group(0))], template)
