"""
Free-text payload builder.

Placeholders take the form ``{{name}}``. Each one is replaced by the string
form of the shared-state value stored under ``name``. Substitution is a
single left-to-right pass: replacement text is never scanned again, so a
value that itself looks like ``{{other}}`` ends up in the payload verbatim.
"""

import logging
import re
from typing import List

from ..state import SharedState

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{(.*?)}}")


def find_placeholders(template: str) -> List[str]:
    """Return placeholder names in the order they appear (duplicates kept)."""
    return PLACEHOLDER_PATTERN.findall(template)


def substitute_template(template: str, state: SharedState) -> str:
    """
    Substitute every ``{{name}}`` placeholder in a template.

    Args:
        template: Template text
        state: Shared state to read values from

    Returns:
        The substituted text

    Raises:
        MissingKeyError: If a placeholder names a key that is not set
    """
    if not template:
        return ""

    def _lookup(match: "re.Match[str]") -> str:
        # Every occurrence is looked up again, even for repeated names.
        return state.get(match.group(1)).as_string()

    result, count = PLACEHOLDER_PATTERN.subn(_lookup, template)
    logger.debug(f"Substituted {count} placeholder(s) in template")
    return result
