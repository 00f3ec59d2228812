"""Domain model entities for comments."""

from comments.domain.model.comment import Comment
from comments.domain.model.flag import Flag
from comments.domain.model.owner import Owner
from comments.domain.model.structure import StructureNode
from comments.domain.model.subscription import Subscription
from comments.domain.model.user import User
from comments.domain.model.vote import Vote

__all__ = [
    "Comment",
    "Flag",
    "Owner",
    "StructureNode",
    "Subscription",
    "User",
    "Vote",
]
