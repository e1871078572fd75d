from __future__ import annotations

import logging

from timew_report.errors import MalformedInputError

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"
CONFIG_SEPARATOR = ": "


def split_input(text: str) -> tuple[str, str]:
    """Split raw report text into its config header and JSON body.

    Only the first blank line counts; anything after it, blank lines
    included, belongs to the body.
    """
    header, sep, body = text.partition(SECTION_SEPARATOR)
    if not sep:
        raise MalformedInputError(
            "missing blank line between configuration header and session body"
        )
    return header, body


def parse_config(header: str) -> dict[str, str]:
    config: dict[str, str] = {}
    for lineno, line in enumerate(header.splitlines(), start=1):
        if not line.strip():
            continue
        key, sep, value = line.partition(CONFIG_SEPARATOR)
        if not sep:
            raise MalformedInputError(
                f"configuration line {lineno} has no {CONFIG_SEPARATOR!r} separator: {line!r}"
            )
        config[key] = value
    logger.debug("parsed %d configuration entries", len(config))
    return config
