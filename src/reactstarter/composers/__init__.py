"""
reactstarter.composers - Feature Composers
==========================================

One module per optional feature. ``COMPOSERS`` maps each ``Feature`` to its
``Composer``; ``composers_for`` returns them in the fixed composition order
(tailwind, data-fetching, i18n, auth-pages).
"""

from __future__ import annotations

from collections.abc import Iterable

from reactstarter.composers import auth, i18n, query, tailwind
from reactstarter.composers.base import ComposeResult, Composer, compose_feature
from reactstarter.models import Feature


COMPOSERS: dict[Feature, Composer] = {
    Feature.TAILWIND: tailwind.COMPOSER,
    Feature.DATA_FETCHING: query.COMPOSER,
    Feature.I18N: i18n.COMPOSER,
    Feature.AUTH_PAGES: auth.COMPOSER,
}


def composers_for(features: Iterable[Feature]) -> list[Composer]:
    """Composers for ``features`` in composition order."""
    return [COMPOSERS[feature] for feature in Feature.in_composition_order(features)]


__all__ = [
    "COMPOSERS",
    "ComposeResult",
    "Composer",
    "compose_feature",
    "composers_for",
]
