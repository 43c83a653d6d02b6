"""
Input Sanitization Module

Sanitizes recipe and inventory text before it is stored, so it can be
rendered by the admin front end without escaping surprises.
"""

import html
import re

from constants import HEX_COLOR_PATTERN

_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Sanitize text by HTML-escaping special characters.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = text.strip()
    text = html.escape(text)

    if len(text) > max_length:
        text = text[:max_length] + '...'

    return text


def sanitize_recipe_title(title, max_length=200):
    """
    Sanitize a recipe title for storage and display.

    Returns an empty string when nothing usable remains; callers decide
    whether a title is required.
    """
    if not title:
        return ''

    if not isinstance(title, str):
        title = str(title)

    title = _CONTROL_CHARS.sub('', title.strip())
    title = html.escape(title)
    # Collapse multiple spaces
    title = re.sub(r'\s+', ' ', title)

    if len(title) > max_length:
        title = title[:max_length-3] + '...'

    return title


def sanitize_notes(notes, max_length=5000):
    """Recipe or batch notes; newlines are preserved."""
    if not notes:
        return ''

    if not isinstance(notes, str):
        notes = str(notes)

    notes = html.escape(notes.strip())

    if len(notes) > max_length:
        notes = notes[:max_length] + '\n...(truncated)'

    return notes


def sanitize_hex_color(color, default):
    """Return ``color`` if it is a #rgb or #rrggbb string, else ``default``."""
    if not color:
        return default
    color = str(color).strip()
    if re.match(HEX_COLOR_PATTERN, color):
        return color
    return default
