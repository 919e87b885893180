"""Resolution of the feed message schema."""

import importlib
import logging

from google.protobuf.message import Message

from delhi_bus_tracker.domain.errors import SchemaUnavailable

logger = logging.getLogger(__name__)


def resolve_message_class(module_name: str, message_type: str) -> type[Message]:
    """Look up the generated protobuf message class for the feed.

    Raises:
        SchemaUnavailable: If the module cannot be imported or does not
            define a protobuf message named ``message_type``.
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise SchemaUnavailable(f"Feed schema module '{module_name}' is not installed") from e

    message_class = getattr(module, message_type, None)
    if not isinstance(message_class, type) or not issubclass(message_class, Message):
        raise SchemaUnavailable(
            f"Feed schema module '{module_name}' has no message type '{message_type}'"
        )

    logger.info(f"Resolved feed schema {message_class.DESCRIPTOR.full_name} from {module_name}")
    return message_class
