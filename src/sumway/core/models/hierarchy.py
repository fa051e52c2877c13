"""
Module: hierarchy

Purpose:
    Provides the scoring hierarchy models: ValueSet (allowed point values of
    one evaluation element), Item (a scoring category built from elements)
    and Hierarchy (all items). Edits never mutate; every edit method returns
    a new Hierarchy with only the touched branch rebuilt.

Key Functions:
    - Hierarchy.default(): One item, one element, a single placeholder value
    - Hierarchy.from_lists(nested): Build from nested lists
    - Hierarchy.add_value(i, j): Append a value continuing the progression

Dependencies:
    - dataclasses (std)

Used By:
    - engine.evaluator: evaluate()
    - engine.assignment: assign()
    - gradebook.controller: Gradebook edits
    - core.utils.serialization: JSON payloads

Design Notes:
    Positivity of values is NOT checked here. A draft hierarchy may hold
    placeholder zeros while it is being edited; the validator rejects them
    before any sums are computed. Structural emptiness (no items, an item
    with no elements, an element with no values) is rejected on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

# Value given to freshly added elements and values until the user sets one.
PLACEHOLDER_VALUE = 0


@dataclass(frozen=True, slots=True)
class ValueSet:
    """
    Allowed point values for one evaluation element.

    Attributes:
        values: Ordered point values, as entered

    Invariants:
        - len(values) >= 1

    Example:
        >>> ValueSet((1, 2, 3)).values
        (1, 2, 3)
    """

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate structure on construction."""
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError("An evaluation element needs at least one value")

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def with_value(self, index: int, value: int) -> ValueSet:
        """Return a copy with the value at ``index`` replaced."""
        _check_index(index, len(self.values), "value")
        values = list(self.values)
        values[index] = value
        return ValueSet(tuple(values))

    def next_value(self) -> int:
        """
        Suggest the value to append next.

        Continues the arithmetic progression of the last two values when
        both are positive, otherwise returns the placeholder.

        Returns:
            Suggested value (may be <= 0 for a descending progression)
        """
        if len(self.values) >= 2:
            second_last, last = self.values[-2], self.values[-1]
            if is_positive_number(last) and is_positive_number(second_last):
                return last + (last - second_last)
        return PLACEHOLDER_VALUE


@dataclass(frozen=True, slots=True)
class Item:
    """
    Top-level scoring category made of evaluation elements.

    Attributes:
        elements: Ordered ValueSets, one per evaluation element

    Invariants:
        - len(elements) >= 1
    """

    elements: tuple[ValueSet, ...]

    def __post_init__(self) -> None:
        """Validate structure on construction."""
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))
        if not self.elements:
            raise ValueError("An item needs at least one evaluation element")

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def value_sets(self) -> tuple[tuple[int, ...], ...]:
        """Raw value tuples of every element, in order."""
        return tuple(element.values for element in self.elements)

    def with_element(self, index: int, element: ValueSet) -> Item:
        """Return a copy with the element at ``index`` replaced."""
        _check_index(index, len(self.elements), "element")
        elements = list(self.elements)
        elements[index] = element
        return Item(tuple(elements))


@dataclass(frozen=True, slots=True)
class Hierarchy:
    """
    The full scoring hierarchy: items → elements → values.

    Attributes:
        items: Ordered Items

    Invariants:
        - len(items) >= 1
        - every Item and ValueSet is non-empty

    Example:
        >>> h = Hierarchy.from_lists([[[1, 2], [10, 20]]])
        >>> h.to_lists()
        [[[1, 2], [10, 20]]]
    """

    items: tuple[Item, ...]

    def __post_init__(self) -> None:
        """Validate structure on construction."""
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))
        if not self.items:
            raise ValueError("A hierarchy needs at least one item")

    def __len__(self) -> int:
        return len(self.items)

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def default(cls) -> Hierarchy:
        """One item holding one element with a single placeholder value."""
        return cls((_new_item(),))

    @classmethod
    def from_lists(cls, nested: Sequence[Sequence[Sequence[int]]]) -> Hierarchy:
        """
        Build a hierarchy from nested sequences.

        Args:
            nested: items → elements → values

        Returns:
            New Hierarchy

        Raises:
            ValueError: If any level is empty
        """
        return cls(tuple(
            Item(tuple(ValueSet(tuple(values)) for values in item))
            for item in nested
        ))

    def to_lists(self) -> list[list[list[int]]]:
        """Nested list form, the shape used for JSON persistence."""
        return [
            [list(element.values) for element in item.elements]
            for item in self.items
        ]

    # ─────────────────────────────────────────────────────────────────────────
    # Edits (whole-value replacement)
    # ─────────────────────────────────────────────────────────────────────────

    def add_item(self) -> Hierarchy:
        return Hierarchy(self.items + (_new_item(),))

    def remove_item(self, item_index: int) -> Hierarchy:
        _check_index(item_index, len(self.items), "item")
        if len(self.items) <= 1:
            raise ValueError("Cannot remove the last item")
        return Hierarchy(self.items[:item_index] + self.items[item_index + 1:])

    def add_element(self, item_index: int) -> Hierarchy:
        item = self._item(item_index)
        return self._with_item(item_index, Item(item.elements + (_new_element(),)))

    def remove_element(self, item_index: int, element_index: int) -> Hierarchy:
        item = self._item(item_index)
        _check_index(element_index, len(item.elements), "element")
        if len(item.elements) <= 1:
            raise ValueError(f"Cannot remove the last element of item {item_index + 1}")
        elements = item.elements[:element_index] + item.elements[element_index + 1:]
        return self._with_item(item_index, Item(elements))

    def add_value(self, item_index: int, element_index: int) -> Hierarchy:
        """Append the suggested next value (see ValueSet.next_value)."""
        element = self._element(item_index, element_index)
        updated = ValueSet(element.values + (element.next_value(),))
        return self._with_element(item_index, element_index, updated)

    def remove_value(self, item_index: int, element_index: int, value_index: int) -> Hierarchy:
        element = self._element(item_index, element_index)
        _check_index(value_index, len(element.values), "value")
        if len(element.values) <= 1:
            raise ValueError(
                f"Cannot remove the last value of item {item_index + 1}, "
                f"element {element_index + 1}"
            )
        values = element.values[:value_index] + element.values[value_index + 1:]
        return self._with_element(item_index, element_index, ValueSet(values))

    def update_value(
        self,
        item_index: int,
        element_index: int,
        value_index: int,
        value: int,
    ) -> Hierarchy:
        element = self._element(item_index, element_index)
        return self._with_element(
            item_index, element_index, element.with_value(value_index, value)
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _item(self, item_index: int) -> Item:
        _check_index(item_index, len(self.items), "item")
        return self.items[item_index]

    def _element(self, item_index: int, element_index: int) -> ValueSet:
        item = self._item(item_index)
        _check_index(element_index, len(item.elements), "element")
        return item.elements[element_index]

    def _with_item(self, item_index: int, item: Item) -> Hierarchy:
        items = list(self.items)
        items[item_index] = item
        return Hierarchy(tuple(items))

    def _with_element(self, item_index: int, element_index: int, element: ValueSet) -> Hierarchy:
        item = self.items[item_index].with_element(element_index, element)
        return self._with_item(item_index, item)


def _new_element() -> ValueSet:
    return ValueSet((PLACEHOLDER_VALUE,))


def _new_item() -> Item:
    return Item((_new_element(),))


def is_positive_number(value: object) -> bool:
    """True for ints greater than zero (bools are not numbers here)."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _check_index(index: int, size: int, what: str) -> None:
    if not 0 <= index < size:
        raise IndexError(f"{what} index {index} out of range (0..{size - 1})")
