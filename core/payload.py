"""
XML payload decoding for the validating upload endpoint.

The document is streamed through ``ElementTree.iterparse``; only the direct
children of the root element named ``UserFrom``, ``UserTo`` and ``Message``
are picked up. Field presence is not enforced: a well-formed document with
none of the three elements decodes to a payload of empty strings.
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET

from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import PayloadDecodeError


class XmlPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_from: str = Field("", alias="UserFrom")
    user_to: str = Field("", alias="UserTo")
    message: str = Field("", alias="Message")


_FIELD_TAGS = frozenset(("UserFrom", "UserTo", "Message"))


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def decode_payload(data: bytes) -> XmlPayload:
    """Parse ``data`` into an :class:`XmlPayload`.

    Raises:
        PayloadDecodeError: If ``data`` is empty or not well-formed XML.
    """
    values: dict[str, str] = {}
    depth = 0
    try:
        for event, elem in ET.iterparse(io.BytesIO(data), events=("start", "end")):
            if event == "start":
                depth += 1
                continue
            depth -= 1
            if depth != 1:
                continue
            name = _local_name(elem.tag)
            if name in _FIELD_TAGS:
                # last occurrence wins
                values[name] = "".join(elem.itertext())
            elem.clear()
    except ET.ParseError as exc:
        raise PayloadDecodeError(details={"reason": str(exc)}) from exc
    return XmlPayload.model_validate(values)


__all__ = ["XmlPayload", "decode_payload"]
