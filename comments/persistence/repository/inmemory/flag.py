"""In-memory flag repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from comments.domain.model.flag import Flag
from comments.domain.repository.flag import FlagRepository
from comments.domain.value import CommentId, FlagId, UserId


class InMemoryFlagRepository(FlagRepository):
    """In-memory implementation of FlagRepository for testing."""

    def __init__(self) -> None:
        self._flags: dict[FlagId, Flag] = {}

    async def find_by_id(self, flag_id: FlagId) -> Optional[Flag]:
        """Find a flag by ID."""
        return self._flags.get(flag_id)

    async def find_by_identity(
        self,
        comment_id: CommentId,
        user_id: Optional[UserId],
        session_id: Optional[str],
    ) -> Optional[Flag]:
        """Find the flag an identity placed on a comment."""
        for flag in self._flags.values():
            if flag.comment_id != comment_id:
                continue
            if user_id is not None and flag.user_id == user_id:
                return flag
            if (
                user_id is None
                and flag.user_id is None
                and session_id
                and flag.session_id == session_id
            ):
                return flag
        return None

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count the flags on a comment."""
        return sum(1 for f in self._flags.values() if f.comment_id == comment_id)

    async def save(self, flag: Flag) -> Flag:
        """Save a new flag.

        Raises:
            IntegrityError: If the identity already flagged the comment
        """
        if await self.find_by_identity(flag.comment_id, flag.user_id, flag.session_id):
            raise IntegrityError("Duplicate flag", None, Exception())
        self._flags[flag.id] = flag
        return flag

    async def delete(self, flag_id: FlagId) -> bool:
        """Delete a flag."""
        return self._flags.pop(flag_id, None) is not None

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every flag on a comment."""
        doomed = [f.id for f in self._flags.values() if f.comment_id == comment_id]
        for flag_id in doomed:
            del self._flags[flag_id]
        return len(doomed)
