"""Schema-driven decoding of ``fantasy_content`` XML into document models.

The fantasy sports API returns loosely-typed XML: numeric elements are
sometimes sent empty (``<total/>``), wrapper elements are omitted when a
collection is empty, and every element lives in the API's default
namespace.  :func:`decode_content` turns such a payload into a
:class:`~yfantasy.models.FantasyContent` by walking the model fields:

* a field's element path is the one given to
  :func:`~yfantasy.models.element`, or else its name, relative to the
  parent, e.g. ``"players/player"``;
* ``list[...]`` fields collect every matching element, other fields use
  the first match;
* nested models recurse, scalar fields take the element's stripped text;
* empty scalar elements are skipped so the model default applies;
* fields declared with :func:`~yfantasy.models.derived` are ignored.

Values that are present but invalid (``<week>abc</week>``) fail model
validation and surface as :class:`~yfantasy.exceptions.ParseError`.
Totals and ranks are kept as raw text at this stage, so any text in
``<total>`` or ``<rank>`` decodes.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, get_args, get_origin

from pydantic import BaseModel, ValidationError

from yfantasy.exceptions import ParseError
from yfantasy.models import FantasyContent

ROOT_ELEMENT = "fantasy_content"

# Marks a blank scalar element so the model default applies.
_EMPTY = object()


def decode_content(data: bytes) -> FantasyContent:
    """Parse raw response bytes into a :class:`FantasyContent` document.

    Args:
        data: The complete response body.

    Returns:
        The decoded (not yet repaired) document.

    Raises:
        ParseError: If the bytes are not well-formed XML, the root element
            is not ``fantasy_content``, or a value fails validation.
    """
    try:
        root = ET.fromstring(data.strip())
    except ET.ParseError as exc:
        raise ParseError(f"Malformed XML in fantasy content: {exc}") from exc

    _strip_namespaces(root)
    if root.tag != ROOT_ELEMENT:
        raise ParseError(
            f"Expected element type <{ROOT_ELEMENT}> but have <{root.tag}>"
        )

    try:
        return FantasyContent.model_validate(element_to_dict(root, FantasyContent))
    except ValidationError as exc:
        raise ParseError(f"Invalid fantasy content: {exc}") from exc


def element_to_dict(element: ET.Element, model: type[BaseModel]) -> dict[str, Any]:
    """Collect the values *model* declares from the children of *element*.

    The returned dict is keyed by field name and is suitable for
    ``model.model_validate``.
    """
    data: dict[str, Any] = {}
    for name, info in model.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        if extra.get("derived"):
            continue

        path = extra.get("path", name)
        annotation = info.annotation

        if get_origin(annotation) is list:
            (item_type,) = get_args(annotation)
            values = [_element_value(child, item_type) for child in element.findall(path)]
            data[name] = [v for v in values if v is not _EMPTY]
            continue

        child = element.find(path)
        if child is None:
            continue
        value = _element_value(child, annotation)
        if value is not _EMPTY:
            data[name] = value
    return data


def _element_value(element: ET.Element, annotation: Any) -> Any:
    """Return the decoded value of a single element, or ``_EMPTY`` for blank scalars."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return element_to_dict(element, annotation)

    text = (element.text or "").strip()
    if not text:
        return _EMPTY
    return text


def _strip_namespaces(root: ET.Element) -> None:
    """Rewrite every tag in the tree to its local name."""
    for element in root.iter():
        if isinstance(element.tag, str) and "}" in element.tag:
            element.tag = element.tag.split("}", 1)[1]
