"""Static routing tables: request type -> marker/section, priority label -> value.

Both tables are read-only views built at import time.
"""

from types import MappingProxyType
from typing import NamedTuple


class CategoryRoute(NamedTuple):
    """Where a request type lands: title marker and Asana section name."""

    marker: str
    bucket: str


# Form request types -> (emoji marker, section name in the Asana project).
# The form labels and section names differ ("Something else?" vs
# "Something Else?"), so sections are always looked up through this table.
CATEGORY_ROUTES: MappingProxyType[str, CategoryRoute] = MappingProxyType(
    {
        "New Customer Onboarding": CategoryRoute(
            "🆕", "🆕 New Customer Onboarding"
        ),
        "Integration Issue": CategoryRoute("🛠️", "🛠️ Integration Issue"),
        "Feature Requests": CategoryRoute("✨", "✨ Feature Requests"),
        "Training Requests": CategoryRoute("📚", "📚 Training Requests"),
        "Account/Billing Question": CategoryRoute(
            "🧾", "🧾 Account/Billing Question"
        ),
        "Something else?": CategoryRoute("❓", "❓ Something Else?"),
    }
)

FALLBACK_CATEGORY = "Something else?"

# Asana has no "urgent" level; Urgent collapses into high.
PRIORITY_VALUES: MappingProxyType[str, str] = MappingProxyType(
    {
        "Low": "low",
        "Medium": "medium",
        "High": "high",
        "Urgent": "high",
    }
)

DEFAULT_PRIORITY = "Medium"
DEFAULT_PRIORITY_VALUE = PRIORITY_VALUES[DEFAULT_PRIORITY]


def priority_value(label: str | None) -> str:
    """Map a form priority label to an Asana priority value."""
    if label is None:
        return DEFAULT_PRIORITY_VALUE
    return PRIORITY_VALUES.get(label, DEFAULT_PRIORITY_VALUE)
