# =============================================================================
# core/services/draft_service.py - Open New-Activity Forms
# =============================================================================
# Keeps each open form (an ActivitySubmission) between requests so that
# fields, staged files and upload progress can be edited and polled
# separately. Drafts live in process memory and belong to the user who
# opened them. Each user keeps at most MAX_DRAFTS_PER_OWNER drafts; opening
# one more drops their oldest draft that is not being submitted.
# =============================================================================

import logging
import uuid

from app.exceptions import DraftNotFoundError, SubmissionInProgressError
from core.services.submission_service import ActivitySubmission

logger = logging.getLogger(__name__)

MAX_DRAFTS_PER_OWNER = 5


class DraftRegistry:
    """In-memory store of open drafts, keyed by draft id."""

    def __init__(self, max_per_owner: int = MAX_DRAFTS_PER_OWNER):
        self._drafts: dict[str, tuple[str, ActivitySubmission]] = {}
        self._max_per_owner = max_per_owner

    def __len__(self) -> int:
        return len(self._drafts)

    def create(self, owner_id: str, submission: ActivitySubmission) -> str:
        self._evict(owner_id)
        draft_id = str(uuid.uuid4())
        self._drafts[draft_id] = (owner_id, submission)
        logger.info(f"Opened draft {draft_id} for user {owner_id}")
        return draft_id

    def get(self, draft_id: str, owner_id: str) -> ActivitySubmission:
        """
        Get a draft owned by this user.

        Raises:
            DraftNotFoundError: If the draft doesn't exist or belongs to someone else
        """
        entry = self._drafts.get(draft_id)
        # Don't reveal that someone else's draft exists
        if entry is None or entry[0] != owner_id:
            raise DraftNotFoundError(draft_id)
        return entry[1]

    def discard(self, draft_id: str, owner_id: str) -> None:
        """
        Close and forget a draft.

        Raises:
            DraftNotFoundError: If the draft doesn't exist or belongs to someone else
            SubmissionInProgressError: If the draft is being submitted
        """
        submission = self.get(draft_id, owner_id)
        if not submission.close():
            raise SubmissionInProgressError(draft_id)
        del self._drafts[draft_id]
        logger.info(f"Discarded draft {draft_id}")

    def _evict(self, owner_id: str) -> None:
        """Make room for one more draft by dropping this user's oldest idle ones."""
        owned = [
            (draft_id, submission)
            for draft_id, (owner, submission) in self._drafts.items()
            if owner == owner_id
        ]
        excess = len(owned) - self._max_per_owner + 1
        for draft_id, submission in owned:
            if excess <= 0:
                break
            if submission.saving:
                continue
            submission.close()
            del self._drafts[draft_id]
            excess -= 1
            logger.info(f"Dropped oldest draft {draft_id} for user {owner_id}")


# Global registry shared by the draft routes
draft_registry = DraftRegistry()
