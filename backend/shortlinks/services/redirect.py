import logging
from typing import Optional

from ..core.errors import LinkNotFound
from .directory import LinkDirectory

logger = logging.getLogger(__name__)


class RedirectResolver:
    """Resolve short codes to destinations, counting each resolution once"""

    def __init__(self, directory: LinkDirectory):
        self.directory = directory

    def resolve(self, short_code: str) -> Optional[str]:
        """
        Record a click on `short_code` and return its destination URL.

        Lookup and increment are the same directory call, so a click is never
        lost to a concurrent redirect or counted against a deleted link.

        Returns:
            The original URL, or None if the code does not exist

        Raises:
            StorageFailure: The directory could not be reached
        """
        try:
            record = self.directory.record_click(short_code)
        except LinkNotFound:
            logger.info("Redirect requested for unknown short code %s", short_code)
            return None

        return record.original_url
