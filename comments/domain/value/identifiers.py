"""Strongly typed identifiers for comment domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Entities owned by this service
CommentId = NewType("CommentId", UUID)
FlagId = NewType("FlagId", UUID)
VoteId = NewType("VoteId", UUID)
SubscriptionId = NewType("SubscriptionId", UUID)
StructureId = NewType("StructureId", UUID)

# Host platform identifiers
OwnerId = NewType("OwnerId", UUID)
UserId = NewType("UserId", UUID)
SiteId = NewType("SiteId", int)
