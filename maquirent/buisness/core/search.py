"""
Global relevance search over the entity collections.

Each candidate field scores 100 for an exact match, 80 for a prefix,
60 for a substring and 30 for an in-order subsequence (fuzzy) match.
Field scores are summed per record; records scoring above zero are
returned best first, at most MAX_RESULTS of them.
"""

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from maquirent.buisness.core.validation import parse_number
from maquirent.utils.cache import TTLCache
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.buisness.core.search")

MAX_RESULTS = 20

EXACT_SCORE = 100
PREFIX_SCORE = 80
CONTAINS_SCORE = 60
FUZZY_SCORE = 30


@dataclass
class SearchResult:
    id: str
    type: str
    title: str
    subtitle: str
    description: str
    url: str
    relevance: int
    highlightedText: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def fuzzy_match(text: str, pattern: str) -> bool:
    """True when every character of pattern appears in text, in order."""
    if not pattern:
        return True
    if not text:
        return False

    pattern_index = 0
    for char in text:
        if char == pattern[pattern_index]:
            pattern_index += 1
            if pattern_index == len(pattern):
                return True
    return False


def calculate_relevance(search_term: str, fields: Iterable[Any]) -> int:
    term = search_term.lower()
    relevance = 0
    for field in fields:
        field_lower = str(field or '').lower()
        if field_lower == term:
            relevance += EXACT_SCORE
        elif field_lower.startswith(term):
            relevance += PREFIX_SCORE
        elif term in field_lower:
            relevance += CONTAINS_SCORE
        elif fuzzy_match(field_lower, term):
            relevance += FUZZY_SCORE
    return relevance


def highlight(search_term: str, text: str) -> str:
    """Wrap case-insensitive occurrences of search_term in <mark> tags."""
    if not search_term:
        return text
    regex = re.compile(f"({re.escape(search_term)})", re.IGNORECASE)
    return regex.sub(r'<mark>\1</mark>', text or '')


def _text(value: Any) -> str:
    return '' if value is None else str(value)


def _total_stock(stock_by_warehouse: Any) -> float:
    if not isinstance(stock_by_warehouse, dict):
        return 0
    total = 0
    for quantity in stock_by_warehouse.values():
        number = parse_number(quantity)
        if number is not None:
            total += number
    return total


class GlobalSearch:
    """
    Linear-scan search across machinery, vehicles, tools, spare parts
    and warehouses.

    Args:
        collections: Store name -> list of records (see CollectionStore.snapshot)
        cache: Optional TTL cache for result lists, keyed by the lowered term
    """

    def __init__(self, collections: Dict[str, List[Dict[str, Any]]], cache: Optional[TTLCache] = None):
        self.collections = collections
        self.cache = cache

    def search(self, search_term: str) -> List[SearchResult]:
        if not search_term or not search_term.strip():
            return []

        term = search_term.lower()
        cache_key = f"search:{term}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        results: List[SearchResult] = []
        results.extend(self._search_machinery(term))
        results.extend(self._search_vehicles(term))
        results.extend(self._search_tools(term))
        results.extend(self._search_spare_parts(term))
        results.extend(self._search_warehouses(term))

        # sorted() is stable, so ties keep collection order
        ranked = sorted(results, key=lambda result: result.relevance, reverse=True)[:MAX_RESULTS]
        logger.debug(f"Search '{search_term}' matched {len(results)} records")

        if self.cache is not None:
            self.cache.set(cache_key, ranked)
        return ranked

    def _records(self, name: str) -> List[Dict[str, Any]]:
        return self.collections.get(name) or []

    def _search_machinery(self, term: str) -> List[SearchResult]:
        hits = []
        for item in self._records('machinery'):
            relevance = calculate_relevance(term, [
                item.get('name'), item.get('brand'), item.get('model'),
                item.get('category'), item.get('serialNumber'),
            ])
            if relevance > 0:
                hits.append(SearchResult(
                    id=item.get('id'),
                    type='machinery',
                    title=_text(item.get('name')),
                    subtitle=f"{_text(item.get('brand'))} {_text(item.get('model'))}",
                    description=f"{_text(item.get('category'))} - {_text(item.get('status'))}",
                    url=f"/machinery/{item.get('id')}",
                    relevance=relevance,
                    highlightedText=highlight(term, _text(item.get('name'))),
                ))
        return hits

    def _search_vehicles(self, term: str) -> List[SearchResult]:
        hits = []
        for item in self._records('vehicles'):
            relevance = calculate_relevance(term, [
                item.get('plate'), item.get('brand'), item.get('model'), _text(item.get('year')),
            ])
            if relevance > 0:
                hits.append(SearchResult(
                    id=item.get('id'),
                    type='vehicle',
                    title=_text(item.get('plate')),
                    subtitle=f"{_text(item.get('brand'))} {_text(item.get('model'))}",
                    description=f"{_text(item.get('year'))} - {_text(item.get('status'))}",
                    url=f"/vehicles/{item.get('id')}",
                    relevance=relevance,
                    highlightedText=highlight(term, _text(item.get('plate'))),
                ))
        return hits

    def _search_tools(self, term: str) -> List[SearchResult]:
        hits = []
        for item in self._records('tools'):
            relevance = calculate_relevance(term, [
                item.get('name'), item.get('internalCode'), item.get('category'), item.get('brand'),
            ])
            if relevance > 0:
                hits.append(SearchResult(
                    id=item.get('id'),
                    type='tool',
                    title=_text(item.get('name')),
                    subtitle=_text(item.get('internalCode')),
                    description=f"{item.get('category') or 'Herramienta'} - {_text(item.get('status'))}",
                    url=f"/tools/{item.get('id')}",
                    relevance=relevance,
                    highlightedText=highlight(term, _text(item.get('name'))),
                ))
        return hits

    def _search_spare_parts(self, term: str) -> List[SearchResult]:
        hits = []
        for item in self._records('spareParts'):
            relevance = calculate_relevance(term, [
                item.get('name'), item.get('code'), item.get('brand'), item.get('category'),
            ])
            if relevance > 0:
                stock = _total_stock(item.get('stockByWarehouse'))
                stock_text = int(stock) if float(stock).is_integer() else stock
                hits.append(SearchResult(
                    id=item.get('id'),
                    type='sparepart',
                    title=_text(item.get('name')),
                    subtitle=_text(item.get('code')),
                    description=f"{_text(item.get('brand'))} - Stock: {stock_text}",
                    url=f"/spareparts/{item.get('id')}",
                    relevance=relevance,
                    highlightedText=highlight(term, _text(item.get('name'))),
                ))
        return hits

    def _search_warehouses(self, term: str) -> List[SearchResult]:
        hits = []
        for item in self._records('warehouses'):
            relevance = calculate_relevance(term, [
                item.get('name'), item.get('city'), item.get('address'),
            ])
            if relevance > 0:
                hits.append(SearchResult(
                    id=item.get('id'),
                    type='warehouse',
                    title=_text(item.get('name')),
                    subtitle=_text(item.get('city')),
                    description=_text(item.get('address')),
                    url=f"/warehouses/{item.get('id')}",
                    relevance=relevance,
                    highlightedText=highlight(term, _text(item.get('name'))),
                ))
        return hits
