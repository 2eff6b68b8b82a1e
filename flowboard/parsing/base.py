from abc import ABC, abstractmethod

from flowboard.parsing.models import ParsedPayload


class BaseContentParser(ABC):
    """Contract for all content parser adapters."""

    @abstractmethod
    def parse(self, raw_bytes: bytes) -> ParsedPayload:
        """Turn raw file content into an ordered list of records.

        Args:
            raw_bytes: Complete file content as uploaded.

        Returns:
            ParsedPayload with one dict per record.

        Raises:
            ParseError: on malformed content, encoding errors or unreadable
                binary structure. Nothing is returned on partial success.
        """
