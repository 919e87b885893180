"""Protocol for decoding the binary feed."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from delhi_bus_tracker.domain.models.decoded_feed import DecodedFeed


class FeedDecoderProtocol(Protocol):
    """Protocol for turning feed bytes into raw vehicle entities."""

    def decode(self, payload: bytes) -> "DecodedFeed":
        """Decode a feed payload.

        Raises:
            SchemaUnavailable: If the message schema cannot be resolved.
            DecodeFailure: If the payload is not a valid feed message.
        """
        ...
