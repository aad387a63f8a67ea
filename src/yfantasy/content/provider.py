"""Turns API responses into repaired :class:`~yfantasy.models.FantasyContent`."""

from __future__ import annotations

from yfantasy.client.counting import CountingClient
from yfantasy.content.repair import repair_content
from yfantasy.content.xml import decode_content
from yfantasy.exceptions import ReadError
from yfantasy.models import FantasyContent
from yfantasy.output import get_output
from yfantasy.provider import ContentProvider


class XmlContentProvider(ContentProvider):
    """Decodes XML responses from a :class:`~yfantasy.client.counting.CountingClient`.

    Transport failures propagate unchanged.  A body that cannot be read
    raises :class:`~yfantasy.exceptions.ReadError`, a body that cannot be
    parsed raises :class:`~yfantasy.exceptions.ParseError`; the response
    is closed either way.
    """

    def __init__(self, client: CountingClient) -> None:
        self._client = client

    @property
    def request_count(self) -> int:
        return self._client.request_count

    def get(self, url: str) -> FantasyContent:
        response = self._client.get(url)
        try:
            body = response.read()
        except Exception as exc:
            raise ReadError(f"Failed to read response for {url}: {exc}") from exc
        finally:
            response.close()

        get_output().debug(f"Decoding {len(body)} bytes from {url}")
        return repair_content(decode_content(body))
