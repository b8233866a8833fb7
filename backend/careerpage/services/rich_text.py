"""
Rich text handling for job descriptions and section content.

Two concerns live here:
- sanitizing HTML that comes back from a content-editable surface;
- a small formatting command model (bold, italic, heading, lists,
  undo, redo) applied to a selection of the document, in place of the
  browser's execCommand.
"""
import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional

import nh3

from careerpage.exceptions import ValidationFailure

logger = logging.getLogger(__name__)

ALLOWED_TAGS = {
    "p", "br",
    "strong", "b", "em", "i", "u",
    "h2", "h3", "h4",
    "ul", "ol", "li",
    "a", "blockquote",
}
ALLOWED_ATTRIBUTES = {"a": {"href"}}
ALLOWED_URL_SCHEMES = {"http", "https", "mailto"}

# Attributes some editors (and pasted chat output) leave on every node
_EDITOR_ATTR_RE = re.compile(r'\s*data-(?:start|end)="[^"]*"')


def strip_editor_attributes(html: str) -> str:
    """Remove data-start / data-end attributes and trim."""
    if not html:
        return ""
    return _EDITOR_ATTR_RE.sub("", html).strip()


def sanitize_html(html: Optional[str]) -> str:
    """Whitelist-clean user supplied HTML before it is stored."""
    if not html:
        return ""
    return nh3.clean(
        strip_editor_attributes(html),
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_URL_SCHEMES,
        strip_comments=True,
    )


class FormatCommand(str, enum.Enum):
    BOLD = "bold"
    ITALIC = "italic"
    HEADING = "heading"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    UNDO = "undo"
    REDO = "redo"


_WRAP_TAGS = {
    FormatCommand.BOLD: "strong",
    FormatCommand.ITALIC: "em",
    FormatCommand.HEADING: "h3",
}
_LIST_TAGS = {
    FormatCommand.BULLET_LIST: "ul",
    FormatCommand.ORDERED_LIST: "ol",
}
_LINE_BREAK_RE = re.compile(r"<br\s*/?>|\n")


@dataclass(frozen=True)
class Selection:
    """Half-open [start, end) range of character offsets into the HTML source."""
    start: int
    end: int

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end


class RichTextDocument:
    """
    Editable HTML value with undo/redo history.

    Offsets address the HTML source; a selection boundary may not fall
    inside a tag.
    """

    def __init__(self, html: str = "", history_limit: int = 100):
        self._html = strip_editor_attributes(html)
        self._undo: list[str] = []
        self._redo: list[str] = []
        self._history_limit = history_limit

    @property
    def html(self) -> str:
        return self._html

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def set_html(self, html: str) -> str:
        """Replace the whole value (typing, paste) as one undoable step."""
        self._commit(strip_editor_attributes(html))
        return self._html

    def apply(self, command: FormatCommand, selection: Optional[Selection] = None) -> str:
        """Run a formatting command and return the new HTML."""
        command = FormatCommand(command)
        if command is FormatCommand.UNDO:
            return self._undo_step()
        if command is FormatCommand.REDO:
            return self._redo_step()

        if selection is None:
            selection = Selection(0, len(self._html))
        self._check_selection(selection)
        if selection.is_collapsed:
            return self._html

        if command in _LIST_TAGS:
            updated = self._make_list(_LIST_TAGS[command], selection)
        else:
            updated = self._toggle_wrap(_WRAP_TAGS[command], selection)
        self._commit(updated)
        return self._html

    def _check_selection(self, selection: Selection) -> None:
        if not 0 <= selection.start <= selection.end <= len(self._html):
            raise ValidationFailure(
                f"Selection {selection.start}:{selection.end} is outside the document"
            )
        for offset in (selection.start, selection.end):
            if self._inside_tag(offset):
                raise ValidationFailure(f"Selection boundary {offset} falls inside a tag")

    def _inside_tag(self, offset: int) -> bool:
        before = self._html[:offset]
        return before.rfind("<") > before.rfind(">")

    def _toggle_wrap(self, tag: str, selection: Selection) -> str:
        html = self._html
        open_tag, close_tag = f"<{tag}>", f"</{tag}>"
        start, end = selection.start, selection.end
        already_wrapped = (
            html[max(0, start - len(open_tag)):start] == open_tag
            and html[end:end + len(close_tag)] == close_tag
        )
        if already_wrapped:
            return html[:start - len(open_tag)] + html[start:end] + html[end + len(close_tag):]
        return html[:start] + open_tag + html[start:end] + close_tag + html[end:]

    def _make_list(self, tag: str, selection: Selection) -> str:
        html = self._html
        lines = [line.strip() for line in _LINE_BREAK_RE.split(html[selection.start:selection.end])]
        items = "".join(f"<li>{line}</li>" for line in lines if line)
        if not items:
            return html
        return html[:selection.start] + f"<{tag}>{items}</{tag}>" + html[selection.end:]

    def _commit(self, updated: str) -> None:
        if updated == self._html:
            return
        self._undo.append(self._html)
        if len(self._undo) > self._history_limit:
            self._undo.pop(0)
        self._redo.clear()
        self._html = updated

    def _undo_step(self) -> str:
        if self._undo:
            self._redo.append(self._html)
            self._html = self._undo.pop()
        return self._html

    def _redo_step(self) -> str:
        if self._redo:
            self._undo.append(self._html)
            self._html = self._redo.pop()
        return self._html
