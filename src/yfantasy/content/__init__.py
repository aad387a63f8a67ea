"""Decoding of fantasy sports XML responses.

Provides :class:`XmlContentProvider`, the pipeline layer that reads a
response body, decodes it with :func:`decode_content` and fills in derived
numeric fields with :func:`repair_content`.
"""

from yfantasy.content.provider import XmlContentProvider
from yfantasy.content.repair import repair_content
from yfantasy.content.xml import decode_content

__all__ = ["XmlContentProvider", "decode_content", "repair_content"]
