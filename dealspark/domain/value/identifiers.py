"""Strongly typed identifiers for DealSpark domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
DealId = NewType("DealId", UUID)

# References to entities owned by collaborators outside the engine
CategoryId = NewType("CategoryId", UUID)
ShopId = NewType("ShopId", UUID)
