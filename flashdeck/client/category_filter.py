from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Set

Card = Dict[str, Any]


@dataclass(frozen=True)
class CategoryFacet:
    name: str
    count: int


def derive_facets(cards: Iterable[Card]) -> List[CategoryFacet]:
    """Distinct non-empty categories with their counts.

    Sorted by count descending, ties broken by name ascending.
    """
    counts = Counter(card.get("category") for card in cards if card.get("category"))
    return [
        CategoryFacet(name=name, count=count)
        for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]


class CategoryFilter:
    """Multi-select category filter over a fixed set of flashcards.

    An empty selection means no filter; otherwise a card is visible when its
    category is one of the selected ones.
    """

    def __init__(self, cards: Iterable[Card]):
        self.cards: List[Card] = list(cards)
        self.facets: List[CategoryFacet] = derive_facets(self.cards)
        self._selected: Set[str] = set()

    @property
    def selected(self) -> List[str]:
        # Facet order, so the selection reads the same way the facets do.
        return [facet.name for facet in self.facets if facet.name in self._selected]

    @property
    def is_active(self) -> bool:
        return bool(self._selected)

    def is_selected(self, category: str) -> bool:
        return category in self._selected

    def toggle(self, category: str) -> bool:
        """Add or remove a category; returns whether it is now selected.

        Blank names are never selectable, as the server treats an empty
        category filter as no filter at all.
        """
        if not category or not category.strip():
            return False
        if category in self._selected:
            self._selected.discard(category)
            return False
        self._selected.add(category)
        return True

    def clear_all(self) -> None:
        self._selected.clear()

    @property
    def visible_cards(self) -> List[Card]:
        if not self._selected:
            return list(self.cards)
        return [card for card in self.cards if card.get("category") in self._selected]

    def study_query(self) -> List[str]:
        """Categories to pass to a study session; empty means the whole deck."""
        return self.selected
