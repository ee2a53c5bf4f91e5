"""
Partition decoded FIT messages by kind and check the export's shape.
"""

import logging
from collections import defaultdict
from typing import Iterable, List, Mapping

from fitrepair.constants import PASSTHROUGH_MESSAGES, RECORD_FIELD_ORDER
from fitrepair.exceptions import CardinalityError, StructuralError, UnsupportedMessageKind
from fitrepair.messages import ClassifiedMessages, Message, MessageKind, Sample

logger = logging.getLogger(__name__)

__all__ = ["classify_messages"]

_SINGLETON_KINDS = (MessageKind.FILE_ID, MessageKind.SESSION, MessageKind.LAP)


def classify_messages(
    messages: Iterable[Message],
    passthrough: Iterable[str] = PASSTHROUGH_MESSAGES,
    field_order: Mapping[str, int] = RECORD_FIELD_ORDER,
) -> ClassifiedMessages:
    """Split an export into its file_id, lap, session, records and passthrough messages.

    Args:
        messages: Decoded messages in file order.
        passthrough: Names of messages copied to the output unchanged.
        field_order: Record field ordering used to build samples.

    Returns:
        ClassifiedMessages with the record messages converted to samples in
        their original, unconsolidated order.

    Raises:
        UnsupportedMessageKind: A message is neither repaired nor whitelisted.
        CardinalityError: file_id, session or lap does not appear exactly once.
        StructuralError: A record message has no timestamp.
    """
    allowed = frozenset(passthrough)
    singletons = defaultdict(list)
    samples: List[Sample] = []
    passed: List[Message] = []

    for position, message in enumerate(messages):
        if message.kind in _SINGLETON_KINDS:
            singletons[message.kind].append(message)
        elif message.kind is MessageKind.RECORD:
            if message.get("timestamp") is None:
                raise StructuralError(f"Record message at position {position} has no timestamp")
            samples.append(Sample.from_message(message, field_order))
        elif message.name in allowed:
            passed.append(message)
        else:
            raise UnsupportedMessageKind(message.name, position)

    for kind in _SINGLETON_KINDS:
        if len(singletons[kind]) != 1:
            raise CardinalityError(kind.value, len(singletons[kind]))

    logger.debug(
        "Classified %d records and %d passthrough messages", len(samples), len(passed)
    )
    return ClassifiedMessages(
        file_id=singletons[MessageKind.FILE_ID][0],
        lap=singletons[MessageKind.LAP][0],
        session=singletons[MessageKind.SESSION][0],
        samples=tuple(samples),
        passthrough=tuple(passed),
    )
