from __future__ import annotations

from enum import Enum


class TemplateCategory(str, Enum):
    """Known message template keys stored in `line_settings.message_templates`.

    Callers may send any key; unknown or empty keys fall back to
    `DEFAULT_TEMPLATE_CATEGORY` when the message is rendered.

    Example:
        >>> TemplateCategory.URGENT_ORDER.value
        'urgent_order'
    """

    URGENT_ORDER = "urgent_order"
    NORMAL_ORDER = "normal_order"
    ORDER_REMINDER = "order_reminder"


DEFAULT_TEMPLATE_CATEGORY = TemplateCategory.NORMAL_ORDER


class Placeholder(str, Enum):
    """Closed set of placeholders the renderer substitutes.

    Anything else in braces is left untouched.
    """

    PO_NUMBER = "{po_number}"
    ITEMS = "{items}"
    DELIVERY_DATE = "{delivery_date}"


class ContactType(str, Enum):
    """Supplier contact role; determines delivery priority."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    URGENT = "urgent"


# Same order as sorting contact_type alphabetically.
CONTACT_TYPE_RANK: dict[str, int] = {
    ContactType.PRIMARY.value: 1,
    ContactType.SECONDARY.value: 2,
    ContactType.URGENT.value: 3,
}
UNRANKED_CONTACT = 99


class TriggerSource(str, Enum):
    """Which trust path admitted a maintenance trigger."""

    SCHEDULED = "scheduled"
    MANUAL = "manual"


class ZeroSuccessPolicy(str, Enum):
    """What a broadcast reports when no recipient received the message.

    - REPORT_SUCCESS: answer `success: true, sent_to: 0` (historical behaviour)
    - REPORT_FAILURE: answer `success: false` and a 502 status
    """

    REPORT_SUCCESS = "report_success"
    REPORT_FAILURE = "report_failure"
