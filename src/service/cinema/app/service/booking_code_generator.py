import secrets
import string
from typing import Awaitable, Callable

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger


BOOKING_CODE_ALPHABET = string.ascii_uppercase + string.digits
FALLBACK_EXTRA_LENGTH = 4


class BookingCodeGenerator:
    """
    Draws booking codes uniformly from [A-Z0-9] with a CSPRNG.

    Each candidate is checked against stored codes. After max_attempts collisions
    at the base length the code grows by FALLBACK_EXTRA_LENGTH characters for
    another max_attempts draws before giving up.
    """

    def __init__(self, *, length: int = 8, max_attempts: int = 10) -> None:
        self.length = length
        self.max_attempts = max_attempts

    def draw(self, length: int) -> str:
        return ''.join(secrets.choice(BOOKING_CODE_ALPHABET) for _ in range(length))

    @Logger.io
    async def generate(self, *, code_exists: Callable[[str], Awaitable[bool]]) -> str:
        for length in (self.length, self.length + FALLBACK_EXTRA_LENGTH):
            for _ in range(self.max_attempts):
                code = self.draw(length)
                if not await code_exists(code):
                    return code
            Logger.base.warning(
                f'⚠️ [BOOKING-CODE] {self.max_attempts} collisions at length {length}'
            )

        raise ConflictError('Unable to allocate a unique booking code')
