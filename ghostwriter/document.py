"""
Shared document surface.

The controller and the streaming renderer only talk to the narrow UISink
contract below; any concrete surface (an editor widget, a terminal, the
in-memory document used headless and in tests) implements it.
"""

from typing import Callable, List, Protocol, runtime_checkable

from .exceptions import DocumentLockedError


@runtime_checkable
class UISink(Protocol):
    def append_text(self, text: str) -> None: ...

    def get_plain_text(self) -> str: ...

    def set_content(self, text: str) -> None: ...

    def set_editable(self, editable: bool) -> None: ...

    def focus_end(self) -> None: ...


class InMemoryDocument:
    """
    Plain-text document implementing UISink.

    Programmatic writes (append_text/set_content) always succeed; human
    writes (type_text/replace_text) are refused unless the document is
    editable, and notify change listeners after they land.
    """

    def __init__(self, text: str = ""):
        self._text = text
        self.editable = False
        self.cursor_at_end = False
        self._listeners: List[Callable[[], None]] = []

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    # UISink

    def append_text(self, text: str) -> None:
        self._text += text

    def get_plain_text(self) -> str:
        return self._text

    def set_content(self, text: str) -> None:
        self._text = text

    def set_editable(self, editable: bool) -> None:
        self.editable = editable

    def focus_end(self) -> None:
        self.cursor_at_end = True

    # Human side

    def type_text(self, text: str) -> None:
        """Append text as the human would by typing at the end."""
        self._require_editable()
        self._text += text
        self._notify()

    def replace_text(self, text: str) -> None:
        """Replace the whole document, e.g. after the human edits earlier text."""
        self._require_editable()
        self._text = text
        self._notify()

    def _require_editable(self) -> None:
        if not self.editable:
            raise DocumentLockedError()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"<InMemoryDocument chars={len(self._text)} editable={self.editable}>"
