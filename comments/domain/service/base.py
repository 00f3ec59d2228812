"""Base service class for domain services."""

from typing import Optional

from comments.domain.value import Actor


class Service:
    """Base class for all domain services.

    Domain services hold the comment lifecycle rules that span entities:
    placement in the thread, moderation, flag and vote bookkeeping.
    """

    @staticmethod
    def actor_ref(actor: Actor) -> Optional[str]:
        """Identify an actor in errors and logs (None for guests)."""
        return str(actor.user_id) if actor.user_id else None
