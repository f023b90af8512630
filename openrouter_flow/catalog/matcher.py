# openrouter_flow/catalog/matcher.py

import locale
from typing import Iterable, List, Sequence

from ..llm.models import FEATURED_MODELS, AutocompleteItem, Model

MAX_RESULTS = 50


def _sort_key(model: Model, positions: dict):
    position = positions.get(model.id)
    if position is not None:
        return (0, position, "")
    return (1, 0, locale.strxfrm(model.name.casefold()))


def match_models(
        query: str,
        models: Iterable[Model],
        featured: Sequence[str] = FEATURED_MODELS,
        limit: int = MAX_RESULTS,
) -> List[AutocompleteItem]:
    """
    Filter and rank models for the flow editor's autocomplete.

    Featured models come first in their curated order, the rest follow by
    display name. The sort is stable.

    Args:
        query: Free text typed by the user; empty matches everything
        models: Current catalog
        featured: Curated identifiers, in ranking order
        limit: Maximum number of results

    Returns:
        List of AutocompleteItem
    """
    needle = (query or "").lower()
    positions = {}
    for index, model_id in enumerate(featured):
        positions.setdefault(model_id, index)

    matched = [
        model for model in models
        if needle in model.id.lower() or needle in model.name.lower()
    ]
    matched.sort(key=lambda model: _sort_key(model, positions))

    return [
        AutocompleteItem(id=model.id, name=model.name, description=model.id)
        for model in matched[:limit]
    ]
