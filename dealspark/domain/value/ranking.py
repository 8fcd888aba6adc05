"""Ranking parameters and listing filters."""

from typing import Optional

from pydantic import Field

from dealspark.domain.value.common import ValueObject
from dealspark.domain.value.identifiers import CategoryId, ShopId


class HeatParams(ValueObject):
    """Tunable weights of the heat score.

    decay_half_life_hours controls how fast older deals fall out of "Hot":
    every that many hours of age costs one order of magnitude of net votes.
    """

    decay_half_life_hours: float = Field(default=12.0, gt=0)
    view_weight: float = Field(default=0.1, ge=0)
    comment_weight: float = Field(default=0.05, ge=0)


class DealFilter(ValueObject):
    """Optional narrowing of a public listing."""

    category_id: Optional[CategoryId] = None
    shop_id: Optional[ShopId] = None
