"""Typed component kinds, one model per catalog entry."""

from typing import Any, ClassVar, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from .schema import COMMON_PROPERTIES
from .values import ActionProperty, BoolOrPath, NumberOrPath, StringOrPath, action_field


class CatalogComponent(BaseModel):
    """
    Base node: identity, kind discriminator and child ids.

    Unknown properties are kept (``extra="allow"``) so producer drift is
    reported as a warning instead of silently disappearing.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    kind: ClassVar[str] = ""

    id: StrictStr = Field(min_length=1)
    component: StrictStr
    children: list[StrictStr] = Field(default_factory=list)

    def properties(self) -> dict[str, Any]:
        """Kind-specific properties the producer actually sent."""
        fields_set = self.model_fields_set
        props = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in fields_set and name not in COMMON_PROPERTIES
        }
        props.update(self.model_extra or {})
        return props

    def to_wire(self) -> dict[str, Any]:
        """Flat JSON form, as it would appear in an updateComponents message."""
        return self.model_dump(mode="json", exclude_unset=True)


class UnknownComponent(CatalogComponent):
    """Raw bag for a kind outside the catalog. Only used for capability reports."""


# Typography & content


class TextComponent(CatalogComponent):
    kind: ClassVar[str] = "Text"

    text: Optional[StringOrPath] = None
    variant: Optional[str] = None


class AlertComponent(CatalogComponent):
    kind: ClassVar[str] = "Alert"

    content: Optional[StringOrPath] = None
    title: Optional[StringOrPath] = None
    variant: Optional[str] = None


class EmptyStateComponent(CatalogComponent):
    kind: ClassVar[str] = "EmptyState"

    illustration: Optional[str] = None
    title: Optional[StringOrPath] = None
    description: Optional[StringOrPath] = None
    action: Optional[ActionProperty] = action_field()
    secondaryAction: Optional[ActionProperty] = action_field()
    variant: Optional[str] = None
    size: Optional[str] = None


# Layout


class StackComponent(CatalogComponent):
    kind: ClassVar[str] = "Stack"

    direction: Optional[str] = None
    gap: Optional[str] = None
    align: Optional[str] = None


class DividerComponent(CatalogComponent):
    kind: ClassVar[str] = "Divider"

    orientation: Optional[str] = None


# Form controls


class TextFieldComponent(CatalogComponent):
    kind: ClassVar[str] = "TextField"

    label: Optional[StringOrPath] = None
    value: Optional[StringOrPath] = None
    helperText: Optional[StringOrPath] = None
    error: Optional[StringOrPath] = None
    placeholder: Optional[str] = None
    type: Optional[str] = None
    required: Optional[bool] = None
    disabled: Optional[BoolOrPath] = None
    onChange: Optional[ActionProperty] = action_field()


class SearchFieldComponent(CatalogComponent):
    kind: ClassVar[str] = "SearchField"

    value: Optional[StringOrPath] = None
    onChange: Optional[ActionProperty] = action_field()
    suggestions: Optional[list[Any]] = None
    showRecentSearches: Optional[bool] = None
    recentSearches: Optional[list[str]] = None
    onSuggestionSelect: Optional[ActionProperty] = action_field()
    onClearRecentSearches: Optional[ActionProperty] = action_field()
    debounceMs: Optional[NumberOrPath] = None
    placeholder: Optional[str] = None
    disabled: Optional[BoolOrPath] = None
    loading: Optional[BoolOrPath] = None


class NumberFieldComponent(CatalogComponent):
    kind: ClassVar[str] = "NumberField"

    label: Optional[StringOrPath] = None
    value: Optional[NumberOrPath] = None
    helperText: Optional[StringOrPath] = None
    error: Optional[StringOrPath] = None
    min: Optional[NumberOrPath] = None
    max: Optional[NumberOrPath] = None
    step: Optional[NumberOrPath] = None
    required: Optional[bool] = None
    disabled: Optional[BoolOrPath] = None
    onChange: Optional[ActionProperty] = action_field()


class SelectComponent(CatalogComponent):
    kind: ClassVar[str] = "Select"

    label: Optional[StringOrPath] = None
    value: Optional[StringOrPath] = None
    options: Optional[list[dict[str, Any]]] = None
    placeholder: Optional[str] = None
    required: Optional[bool] = None
    disabled: Optional[BoolOrPath] = None
    onChange: Optional[ActionProperty] = action_field()


class CheckboxComponent(CatalogComponent):
    kind: ClassVar[str] = "Checkbox"

    label: Optional[StringOrPath] = None
    checked: Optional[BoolOrPath] = None
    disabled: Optional[BoolOrPath] = None
    onChange: Optional[ActionProperty] = action_field()


# Interactive


class ButtonComponent(CatalogComponent):
    kind: ClassVar[str] = "Button"

    label: Optional[StringOrPath] = None
    variant: Optional[str] = None
    size: Optional[str] = None
    action: Optional[ActionProperty] = action_field()
    onClick: Optional[ActionProperty] = action_field()
    disabled: Optional[BoolOrPath] = None


class ChipComponent(CatalogComponent):
    kind: ClassVar[str] = "Chip"

    content: Optional[StringOrPath] = None
    variant: Optional[str] = None
    size: Optional[str] = None
    onClick: Optional[ActionProperty] = action_field()


class FilterChipComponent(CatalogComponent):
    kind: ClassVar[str] = "FilterChip"

    content: Optional[StringOrPath] = None
    selected: Optional[BoolOrPath] = None
    onDismiss: Optional[ActionProperty] = action_field()


class BooleanChipComponent(CatalogComponent):
    kind: ClassVar[str] = "BooleanChip"

    content: Optional[StringOrPath] = None
    selected: Optional[BoolOrPath] = None
    onClick: Optional[ActionProperty] = action_field()


class TabBarComponent(CatalogComponent):
    kind: ClassVar[str] = "TabBar"

    tabs: Optional[list[dict[str, Any]]] = None
    activeTab: Optional[StringOrPath] = None
    onTabChange: Optional[ActionProperty] = action_field()
    variant: Optional[str] = None


# Cards & lists


class CardComponent(CatalogComponent):
    kind: ClassVar[str] = "Card"

    title: Optional[StringOrPath] = None
    excerpt: Optional[StringOrPath] = None
    subtitle: Optional[StringOrPath] = None
    labels: Optional[list[str]] = None
    onClick: Optional[ActionProperty] = action_field()


class ListComponent(CatalogComponent):
    kind: ClassVar[str] = "List"

    dividers: Optional[bool] = None
    spacing: Optional[str] = None


class ListItemComponent(CatalogComponent):
    kind: ClassVar[str] = "ListItem"

    primary: Optional[StringOrPath] = None
    secondary: Optional[StringOrPath] = None
    badge: Optional[StrictStr] = None
    interactive: Optional[bool] = None
    onClick: Optional[ActionProperty] = action_field()


class DateGroupComponent(CatalogComponent):
    kind: ClassVar[str] = "DateGroup"

    date: Optional[StringOrPath] = None
    format: Optional[str] = None
    showTotal: Optional[bool] = None
    totalAmount: Optional[NumberOrPath] = None
    showCount: Optional[bool] = None
    count: Optional[NumberOrPath] = None
    sticky: Optional[bool] = None
    currency: Optional[str] = None


# Banking


class MoneyDisplayComponent(CatalogComponent):
    kind: ClassVar[str] = "MoneyDisplay"

    amount: Optional[NumberOrPath] = None
    currency: Optional[str] = None
    variant: Optional[str] = None
    showSign: Optional[bool] = None
    size: Optional[str] = None
    weight: Optional[str] = None
    locale: Optional[str] = None
    align: Optional[str] = None


class TransactionListItemComponent(CatalogComponent):
    kind: ClassVar[str] = "TransactionListItem"

    merchant: Optional[StringOrPath] = None
    amount: Optional[NumberOrPath] = None
    date: Optional[StringOrPath] = None
    status: Optional[str] = None
    category: Optional[str] = None
    merchantLogo: Optional[StringOrPath] = None
    description: Optional[StringOrPath] = None
    hasReceipt: Optional[bool] = None
    hasNote: Optional[bool] = None
    currency: Optional[str] = None
    onClick: Optional[ActionProperty] = action_field()


class AccountCardComponent(CatalogComponent):
    kind: ClassVar[str] = "AccountCard"

    accountType: Optional[str] = None
    accountName: Optional[StringOrPath] = None
    balance: Optional[NumberOrPath] = None
    accountNumber: Optional[str] = None
    trend: Optional[str] = None
    trendValue: Optional[StringOrPath] = None
    action: Optional[ActionProperty] = action_field()
    secondaryAction: Optional[ActionProperty] = action_field()
    currency: Optional[str] = None
    onClick: Optional[ActionProperty] = action_field()


class CategoryBadgeComponent(CatalogComponent):
    kind: ClassVar[str] = "CategoryBadge"

    content: Optional[StringOrPath] = None
    label: Optional[StringOrPath] = None
    color: Optional[str] = None
    variant: Optional[str] = None
    size: Optional[str] = None
    icon: Optional[str] = None
    onClick: Optional[ActionProperty] = action_field()
    disabled: Optional[BoolOrPath] = None


class StatusBadgeComponent(CatalogComponent):
    kind: ClassVar[str] = "StatusBadge"

    status: Optional[str] = None
    label: Optional[StringOrPath] = None
    size: Optional[str] = None
    showIcon: Optional[bool] = None
    liveRegion: Optional[bool] = None


# Modals


class ModalComponent(CatalogComponent):
    kind: ClassVar[str] = "Modal"

    title: Optional[StringOrPath] = None
    open: Optional[BoolOrPath] = None
    onClose: Optional[ActionProperty] = action_field()


class ActionSheetComponent(CatalogComponent):
    kind: ClassVar[str] = "ActionSheet"

    isOpen: Optional[BoolOrPath] = None
    onClose: Optional[ActionProperty] = action_field()
    title: Optional[StringOrPath] = None
    description: Optional[StringOrPath] = None
    actions: Optional[list[dict[str, Any]]] = None
    closeOnOverlayClick: Optional[bool] = None
    closeOnEscape: Optional[bool] = None
    showCloseButton: Optional[bool] = None


# Utility


class SkeletonComponent(CatalogComponent):
    kind: ClassVar[str] = "Skeleton"

    variant: Optional[str] = None
    width: Optional[StringOrPath] = None
    height: Optional[StringOrPath] = None
    count: Optional[NumberOrPath] = None


class ProgressComponent(CatalogComponent):
    kind: ClassVar[str] = "Progress"

    value: Optional[NumberOrPath] = None
    variant: Optional[str] = None
    size: Optional[str] = None
    label: Optional[StringOrPath] = None


COMPONENT_MODELS: Mapping[str, type[CatalogComponent]] = {
    model.kind: model
    for model in (
        TextComponent,
        ButtonComponent,
        TextFieldComponent,
        ChipComponent,
        FilterChipComponent,
        BooleanChipComponent,
        CardComponent,
        ListComponent,
        ListItemComponent,
        StackComponent,
        AlertComponent,
        DividerComponent,
        SkeletonComponent,
        SelectComponent,
        NumberFieldComponent,
        CheckboxComponent,
        ModalComponent,
        ProgressComponent,
        MoneyDisplayComponent,
        TransactionListItemComponent,
        AccountCardComponent,
        DateGroupComponent,
        EmptyStateComponent,
        SearchFieldComponent,
        CategoryBadgeComponent,
        StatusBadgeComponent,
        TabBarComponent,
        ActionSheetComponent,
    )
}


def parse_component(raw: Mapping[str, Any]) -> CatalogComponent:
    """
    Build the typed node for a flat component entry.

    Kinds outside the catalog become ``UnknownComponent``.

    Raises:
        pydantic.ValidationError: If a known property has the wrong type
    """
    model = COMPONENT_MODELS.get(raw.get("component"), UnknownComponent)  # type: ignore[arg-type]
    return model.model_validate(raw)


__all__ = ["CatalogComponent", "UnknownComponent", "COMPONENT_MODELS", "parse_component"]
