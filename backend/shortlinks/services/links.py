import logging
from typing import Callable, List, Optional

from ..config import settings
from ..core.errors import CodeConflict, CodeTaken, GenerationExhausted, InvalidInput
from ..core.shortener import generate_short_code, is_reserved_code, validate_short_code
from ..schemas.link import LinkRecord
from ..utils.validators import is_valid_url
from .directory import LinkDirectory

logger = logging.getLogger(__name__)


class LinkService:
    """
    Create, read, list and delete short links.

    Stateless apart from its collaborators; safe to share across threads.
    """

    def __init__(
        self,
        directory: LinkDirectory,
        generator: Callable[[int], str] = generate_short_code,
        code_length: int = settings.SHORT_CODE_LENGTH,
        max_attempts: int = settings.MAX_GENERATION_ATTEMPTS
    ):
        self.directory = directory
        self.generator = generator
        self.code_length = code_length
        self.max_attempts = max_attempts

    def create_link(self, url: str, short_code: Optional[str] = None) -> LinkRecord:
        """
        Create a short link for `url`.

        A requested `short_code` is tried exactly once. Without one, random
        codes are generated until an insert succeeds or `max_attempts`
        collisions have happened.

        Raises:
            InvalidInput: Malformed URL or short code
            CodeTaken: The requested code already exists
            GenerationExhausted: Every generated code collided
        """
        is_valid, error_msg = is_valid_url(url)
        if not is_valid:
            raise InvalidInput(error_msg)

        if short_code is not None:
            is_valid_code, error_msg = validate_short_code(short_code)
            if not is_valid_code:
                raise InvalidInput(error_msg, code=short_code)

            try:
                record = self.directory.put(short_code, url)
            except CodeConflict as e:
                raise CodeTaken(code=short_code) from e

            logger.info("Created link %s -> %s", record.short_code, record.original_url)
            return record

        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generator(self.code_length)
            if is_reserved_code(candidate):
                logger.warning(
                    "Generated short code %s is reserved (attempt %d/%d)",
                    candidate, attempt, self.max_attempts
                )
                continue

            try:
                record = self.directory.put(candidate, url)
            except CodeConflict:
                logger.warning(
                    "Generated short code %s collided (attempt %d/%d)",
                    candidate, attempt, self.max_attempts
                )
                continue

            logger.info("Created link %s -> %s", record.short_code, record.original_url)
            return record

        logger.error("Gave up generating a short code after %d attempts", self.max_attempts)
        raise GenerationExhausted()

    def get_link(self, short_code: str) -> LinkRecord:
        return self.directory.get(short_code)

    def list_links(self, search: Optional[str] = None) -> List[LinkRecord]:
        return self.directory.list_all(search=search)

    def delete_link(self, short_code: str) -> None:
        self.directory.remove(short_code)
        logger.info("Deleted link %s", short_code)
