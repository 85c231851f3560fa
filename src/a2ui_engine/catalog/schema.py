"""
Common Origin catalog definition.

Static description of every component kind a producer may reference:
required properties, known properties, enumerated values, and which
properties hold node references, numbers, or URLs. Shaped like the JSON
catalog definition the producer is prompted with.
"""

from typing import Any

CATALOG_ID = "common-origin.design-system:v2.4"
CATALOG_VERSION = "2.4"

# Properties every node may carry regardless of kind
COMMON_PROPERTIES = ("id", "component", "children")

_SIZES = ["small", "medium", "large"]

CATALOG_DEFINITION: dict[str, Any] = {
    "catalogId": CATALOG_ID,
    "version": CATALOG_VERSION,
    "components": {
        # Typography & content
        "Text": {
            "description": "Render text with typography variants",
            "required": ["text"],
            "properties": {
                "text": {},
                "variant": {
                    "enum": [
                        "h1", "h2", "h3", "h4", "h5", "h6",
                        "heading-xl", "heading-lg", "heading-md", "heading-sm",
                        "body", "body-lg", "body-sm", "caption", "label",
                    ]
                },
            },
        },
        "Alert": {
            "description": "Alert message with variants",
            "required": ["content"],
            "properties": {
                "content": {},
                "title": {},
                "variant": {"enum": ["info", "success", "warning", "error"]},
            },
        },
        "EmptyState": {
            "description": "Engaging empty state with illustration, title, description, and call-to-action buttons",
            "required": ["title"],
            "properties": {
                "illustration": {"enum": ["search", "transactions", "error", "empty", "success", "generic"]},
                "title": {},
                "description": {},
                "action": {},
                "secondaryAction": {},
                "variant": {"enum": ["default", "compact", "card"]},
                "size": {"enum": _SIZES},
            },
        },
        # Layout
        "Stack": {
            "description": "Layout container with flex direction",
            "required": ["direction"],
            "properties": {
                "direction": {"enum": ["row", "column"]},
                "gap": {"enum": ["none", "xs", "sm", "md", "lg", "xl"]},
                "align": {"enum": ["start", "center", "end", "stretch"]},
            },
        },
        "Divider": {
            "description": "Visual separator",
            "required": [],
            "properties": {
                "orientation": {"enum": ["horizontal", "vertical"]},
            },
        },
        # Form controls
        "TextField": {
            "description": "Text input field with validation",
            "required": ["label"],
            "properties": {
                "label": {},
                "value": {},
                "helperText": {},
                "error": {},
                "placeholder": {},
                "type": {"enum": ["text", "email", "tel", "url", "search", "password"]},
                "required": {},
                "disabled": {},
                "onChange": {},
            },
        },
        "SearchField": {
            "description": "Advanced search input with autocomplete suggestions, recent searches, and debouncing",
            "required": [],
            "properties": {
                "value": {},
                "onChange": {},
                "suggestions": {},
                "showRecentSearches": {},
                "recentSearches": {},
                "onSuggestionSelect": {},
                "onClearRecentSearches": {},
                "debounceMs": {"numeric": True},
                "placeholder": {},
                "disabled": {},
                "loading": {},
            },
        },
        "NumberField": {
            "description": "Numeric input with min/max validation",
            "required": ["label"],
            "properties": {
                "label": {},
                "value": {},
                "helperText": {},
                "error": {},
                "min": {"numeric": True},
                "max": {"numeric": True},
                "step": {"numeric": True},
                "required": {},
                "disabled": {},
                "onChange": {},
            },
        },
        "Select": {
            "description": "Dropdown selection with options",
            "required": ["label", "options"],
            "properties": {
                "label": {},
                "value": {},
                "options": {},
                "placeholder": {},
                "required": {},
                "disabled": {},
                "onChange": {},
            },
        },
        "Checkbox": {
            "description": "Toggle checkbox for boolean inputs",
            "required": ["label"],
            "properties": {
                "label": {},
                "checked": {},
                "disabled": {},
                "onChange": {},
            },
        },
        # Interactive
        "Button": {
            "description": "Interactive button with variants",
            "required": ["label"],
            "properties": {
                "label": {},
                "variant": {"enum": ["primary", "secondary", "naked"]},
                "size": {"enum": _SIZES},
                "action": {},
                "onClick": {},
                "disabled": {},
            },
        },
        "Chip": {
            "description": "Display chip component",
            "required": ["content"],
            "properties": {
                "content": {},
                "variant": {"enum": ["default", "emphasis", "subtle", "interactive"]},
                "size": {"enum": ["small", "medium"]},
                "onClick": {},
            },
        },
        "FilterChip": {
            "description": "Dismissible filter chip",
            "required": ["content"],
            "properties": {
                "content": {},
                "selected": {},
                "onDismiss": {},
            },
        },
        "BooleanChip": {
            "description": "Toggle chip for filters",
            "required": ["content"],
            "properties": {
                "content": {},
                "selected": {},
                "onClick": {},
            },
        },
        "TabBar": {
            "description": "Accessible tab navigation with 3 visual variants (default, pills, underline) and badge counts",
            "required": ["tabs", "activeTab"],
            "properties": {
                "tabs": {},
                "activeTab": {},
                "onTabChange": {},
                "variant": {"enum": ["default", "pills", "underline"]},
            },
        },
        # Cards & lists
        "Card": {
            "description": "Content card with title and excerpt",
            "required": ["title"],
            "properties": {
                "title": {},
                "excerpt": {},
                "subtitle": {},
                "labels": {},
                "onClick": {},
            },
        },
        "List": {
            "description": "Container for list items",
            "required": [],
            "properties": {
                "dividers": {},
                "spacing": {"enum": ["compact", "comfortable"]},
            },
        },
        "ListItem": {
            "description": "Individual list item with primary/secondary text",
            "required": ["primary"],
            "properties": {
                "primary": {},
                "secondary": {},
                "badge": {"reference": True},
                "interactive": {},
                "onClick": {},
            },
        },
        "DateGroup": {
            "description": "Date-grouped list container with formatted date header, optional total amount and item count",
            "required": ["date"],
            "properties": {
                "date": {},
                "format": {"enum": ["short", "medium", "long", "relative"]},
                "showTotal": {},
                "totalAmount": {"numeric": True},
                "showCount": {},
                "count": {"numeric": True},
                "sticky": {},
                "currency": {},
            },
        },
        # Banking
        "MoneyDisplay": {
            "description": "Display formatted monetary amounts with currency, color variants (positive/negative), and localization",
            "required": ["amount"],
            "properties": {
                "amount": {"numeric": True},
                "currency": {},
                "variant": {"enum": ["default", "positive", "negative", "neutral"]},
                "showSign": {},
                "size": {"enum": ["small", "medium", "large", "xlarge"]},
                "weight": {"enum": ["regular", "medium", "bold"]},
                "locale": {},
                "align": {"enum": ["left", "center", "right"]},
            },
        },
        "TransactionListItem": {
            "description": "Rich transaction display with merchant info, amount, date, status badge, category, and optional receipt/note indicators",
            "required": ["merchant", "amount", "date"],
            "properties": {
                "merchant": {},
                "amount": {"numeric": True},
                "date": {},
                "status": {"enum": ["pending", "completed", "failed", "cancelled", "processing", "scheduled"]},
                "category": {},
                "merchantLogo": {"url": True},
                "description": {},
                "hasReceipt": {},
                "hasNote": {},
                "currency": {},
                "onClick": {},
            },
        },
        "AccountCard": {
            "description": "Account summary card showing account type, name, balance, trend indicator, and action buttons",
            "required": ["accountType", "accountName", "balance"],
            "properties": {
                "accountType": {"enum": ["checking", "savings", "credit", "loan", "investment"]},
                "accountName": {},
                "balance": {"numeric": True},
                "accountNumber": {},
                "trend": {"enum": ["up", "down", "neutral"]},
                "trendValue": {},
                "action": {},
                "secondaryAction": {},
                "currency": {},
                "onClick": {},
            },
        },
        "CategoryBadge": {
            "description": "Category indicator badge with 8 color options, icons, and multiple visual variants",
            "required": [],
            "properties": {
                "content": {},
                "label": {},
                "color": {"enum": ["blue", "green", "red", "orange", "purple", "pink", "yellow", "gray"]},
                "variant": {"enum": ["filled", "outlined", "subtle"]},
                "size": {"enum": _SIZES},
                "icon": {},
                "onClick": {},
                "disabled": {},
            },
        },
        "StatusBadge": {
            "description": "Transaction status badge with 6 status types (pending, completed, failed, etc.) and semantic colors",
            "required": ["status"],
            "properties": {
                "status": {"enum": ["pending", "completed", "failed", "cancelled", "processing", "scheduled"]},
                "label": {},
                "size": {"enum": _SIZES},
                "showIcon": {},
                "liveRegion": {},
            },
        },
        # Modals
        "Modal": {
            "description": "Modal dialog for confirmations",
            "required": ["title", "open"],
            "properties": {
                "title": {},
                "open": {},
                "onClose": {},
            },
        },
        "ActionSheet": {
            "description": "Mobile-optimized bottom sheet modal for displaying action menus with icons and destructive actions",
            "required": ["isOpen", "actions"],
            "properties": {
                "isOpen": {},
                "onClose": {},
                "title": {},
                "description": {},
                "actions": {},
                "closeOnOverlayClick": {},
                "closeOnEscape": {},
                "showCloseButton": {},
            },
        },
        # Utility
        "Skeleton": {
            "description": "Loading placeholder with multiple variants",
            "required": [],
            "properties": {
                "variant": {"enum": ["text", "rect", "circle", "card", "list"]},
                "width": {},
                "height": {},
                "count": {"numeric": True},
            },
        },
        "Progress": {
            "description": "Progress indicator with percentage",
            "required": ["value"],
            "properties": {
                "value": {"numeric": True},
                "variant": {"enum": ["linear", "circular"]},
                "size": {"enum": _SIZES},
                "label": {},
            },
        },
    },
}
