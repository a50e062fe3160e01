"""
Video Domain Exceptions.

Failure taxonomy of the streaming core. Each exception maps onto exactly one
stream outcome or log entry; none of them carries HTTP details.
"""

from typing import Optional


class MediaStreamError(Exception):
    """Base class for streaming failures"""


class MediaNotFound(MediaStreamError):
    """No metadata record exists for the identifier"""

    def __init__(self, media_id: str):
        super().__init__(f"Media {media_id} not found")
        self.media_id = media_id


class MediaGone(MediaStreamError):
    """The record exists but its bytes are not in storage"""

    def __init__(self, media_id: str, reason: str = "file missing on server"):
        super().__init__(f"Media {media_id}: {reason}")
        self.media_id = media_id


class MalformedRange(MediaStreamError):
    """Range header present but not a single satisfiable byte range"""

    def __init__(self, message: str, total_length: Optional[int] = None):
        super().__init__(message)
        self.total_length = total_length


class ResourceUnavailable(MediaStreamError):
    """Backing bytes could not be opened or ended early"""


class AccountingFailure(MediaStreamError):
    """A view increment did not reach the counter store"""
