"""Request body parsing.

JSON numbers are decoded straight into ``Decimal`` so a price sent as
``999.99`` keeps its exact digits instead of passing through ``float``.
"""

from __future__ import annotations

import codecs
import json
from decimal import Decimal

from django.conf import settings
from rest_framework.exceptions import ParseError
from rest_framework.parsers import JSONParser


def _reject_constant(value: str):
    raise ValueError(f"Out of range float value '{value}'")


class DecimalJSONParser(JSONParser):
    """``application/json`` parser that never produces floats."""

    def parse(self, stream, media_type=None, parser_context=None):
        parser_context = parser_context or {}
        encoding = parser_context.get("encoding", settings.DEFAULT_CHARSET)

        try:
            decoded_stream = codecs.getreader(encoding)(stream)
            return json.load(
                decoded_stream,
                parse_float=Decimal,
                parse_constant=_reject_constant,
            )
        except ValueError as exc:
            raise ParseError(f"JSON parse error - {exc}") from exc
