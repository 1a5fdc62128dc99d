import re
from typing import Optional
import logging

from bs4 import Tag

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r'\s+')

def clean_text(text: Optional[str]) -> str:
    """
    Removes leading/trailing whitespace, entity-decoded non-breaking spaces
    included. Inner whitespace is kept as is. Returns "" for None.
    """
    if text is None:
        return ""
    return str(text).strip()


def clean_label(text: Optional[str]) -> str:
    """
    Like clean_text, but also collapses inner runs of whitespace to one space,
    so a header wrapped over several source lines still matches its alias.
    """
    return _WHITESPACE_RE.sub(' ', clean_text(text)).strip()


def cell_text(cell: Tag) -> str:
    """
    Flattens any nested markup inside a <td> into its decoded, trimmed text.
    BeautifulSoup has already decoded entities such as &nbsp; and &amp;.
    """
    return clean_text(cell.get_text())


def label_text(cell: Tag) -> str:
    """Header-cell counterpart of cell_text."""
    return clean_label(cell.get_text())
