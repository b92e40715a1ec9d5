# =============================================================================
# core/services/staging_service.py - Attachment Staging
# =============================================================================
# Holds the attachments picked for a new activity until it is submitted.
# Staging is purely local: nothing is uploaded here.
# =============================================================================

import logging
from typing import Iterable, Iterator

from core.models.staging import StagedFile

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def is_accepted_type(content_type: str | None) -> bool:
    """Images of any kind and PDFs are accepted; everything else is not."""
    if not content_type:
        return False
    content_type = content_type.lower()
    return (
        content_type == PDF_CONTENT_TYPE
        or content_type.startswith("image/")
        or "pdf" in content_type
    )


class FileStaging:
    """
    Ordered list of staged attachments.

    Offering the same file twice stages it twice. Entries are removed by
    their staging id, or all at once by name.
    """

    def __init__(self):
        self._files: list[StagedFile] = []

    def __iter__(self) -> Iterator[StagedFile]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    @property
    def files(self) -> tuple[StagedFile, ...]:
        return tuple(self._files)

    def offer(
        self, incoming: Iterable[StagedFile]
    ) -> tuple[list[StagedFile], list[StagedFile]]:
        """
        Stage every acceptable file, in the order given.

        Returns:
            Tuple of (accepted, rejected) files
        """
        accepted: list[StagedFile] = []
        rejected: list[StagedFile] = []

        for staged in incoming:
            if is_accepted_type(staged.content_type):
                accepted.append(staged)
            else:
                rejected.append(staged)

        self._files.extend(accepted)

        if rejected:
            logger.debug(
                f"Rejected {len(rejected)} file(s) with unsupported types: "
                f"{[f.content_type for f in rejected]}"
            )
        return accepted, rejected

    def remove(self, staging_id: str) -> bool:
        """Remove one entry. Returns False if no entry had that id."""
        for index, staged in enumerate(self._files):
            if staged.staging_id == staging_id:
                del self._files[index]
                return True
        return False

    def remove_by_name(self, name: str) -> int:
        """Remove every entry with this filename. Returns how many were removed."""
        before = len(self._files)
        self._files = [f for f in self._files if f.name != name]
        return before - len(self._files)

    def clear(self) -> None:
        self._files.clear()
