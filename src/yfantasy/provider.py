"""The capability shared by every layer of the request pipeline.

:class:`ContentProvider` has two members: fetch the document behind
a URL, and report how many requests reached the API.  Each layer of the
pipeline implements it and wraps the next one:

- :class:`~yfantasy.content.provider.XmlContentProvider` -- decodes and
  repairs responses from a :class:`~yfantasy.client.counting.CountingClient`.
- :class:`~yfantasy.cache.cache.CachedContentProvider` -- serves
  recently fetched documents from a :class:`~yfantasy.cache.cache.ContentCache`.

:class:`~yfantasy.client.client.Client` holds whichever chain was
assembled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from yfantasy.models import FantasyContent


class ContentProvider(ABC):
    """Returns the fantasy content behind an API request URL."""

    @abstractmethod
    def get(self, url: str) -> FantasyContent:
        """Return the decoded document for *url*.

        Raises:
            FantasyError: Or whatever the underlying transport raised,
                propagated unchanged.
        """

    @property
    @abstractmethod
    def request_count(self) -> int:
        """Number of requests made to the API on behalf of this provider."""
