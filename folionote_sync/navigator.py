from __future__ import annotations

import logging
from typing import Callable

from folionote_core.outline import Section

from .constants import (
    MESSAGE_FIRST_NOTE,
    MESSAGE_FIRST_PAGE,
    MESSAGE_LAST_PAGE,
    MESSAGE_NO_NEXT_NOTES,
)
from .errors import ScopeNotFound, UnparsablePageProperty
from .factory import create_section
from .locator import find_section_by_page, page_of, parse_page
from .models import Direction, Focus, NavigatorState, Scope
from .session import Session


logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


class Navigator:
    """
    Couples page changes in the viewer with the notes view.

    Every public operation runs under the session lock and recovers the
    user-facing errors itself; they are reported through `notify`.
    """

    def __init__(self, session: Session, notify: Notifier | None = None) -> None:
        self._session = session
        self._notify_callback = notify
        self._state = NavigatorState.idle()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> NavigatorState:
        return self._state

    def _notify(self, message: str) -> None:
        logger.info("%s", message)
        if self._notify_callback:
            try:
                self._notify_callback(message)
            except Exception as exc:  # pragma: no cover - UI callback
                logger.warning("Notification callback failed: %s", exc)

    def _scope(self) -> Scope | None:
        try:
            return self._session.resolve_scope()
        except ScopeNotFound as exc:
            self._notify(str(exc))
            return None

    def sync_current_page(self) -> Section | None:
        """Show the note of the viewer's current page, if there is one."""
        with self._session.lock:
            scope = self._scope()
            if scope is None:
                return None
            page = self._session.viewer.current_page()
            if page < 1:
                return None
            section = find_section_by_page(scope, self._session.page_property, page, self._session.view)
            self._state = (
                NavigatorState.viewing_note(page)
                if section is not None
                else NavigatorState.no_note_for_page(page)
            )
            return section

    def go_to_page(self, direction: Direction) -> NavigatorState:
        """
        Turn the viewer one page and show that page's note if it has one.

        Nothing happens past the first or last page. No note is created here.
        Focus always returns to the viewer.
        """
        with self._session.lock:
            try:
                return self._turn_page(direction)
            finally:
                self._session.focus = Focus.VIEWER

    def _turn_page(self, direction: Direction) -> NavigatorState:
        session = self._session
        scope = self._scope()
        if scope is None:
            return self._state
        viewer = session.viewer
        target = viewer.current_page() + direction.value
        if target < 1:
            self._notify(MESSAGE_FIRST_PAGE)
            return self._state
        if target > viewer.page_count():
            self._notify(MESSAGE_LAST_PAGE)
            return self._state

        if direction is Direction.FORWARD:
            viewer.next_page()
        else:
            viewer.previous_page()
        page = viewer.current_page()
        section = find_section_by_page(scope, session.page_property, page, session.view)
        if section is not None:
            self._state = NavigatorState.viewing_note(page)
        else:
            self._state = NavigatorState.no_note_for_page(page)
        return self._state

    def add_or_open_note(self) -> Section | None:
        """Focus the note of the current page, creating it first when missing."""
        with self._session.lock:
            session = self._session
            scope = self._scope()
            if scope is None:
                return None
            page = session.viewer.current_page()
            if page < 1:
                self._notify("The source document has no pages")
                return None
            section = find_section_by_page(scope, session.page_property, page, session.view)
            if section is None:
                section = create_section(
                    scope,
                    session.page_property,
                    page,
                    view=session.view,
                    config=session.config,
                    source_path=session.source_path,
                    notes_path=session.notes_path,
                )
            elif not section.body or section.body[-1].strip():
                session.document.append_body_line(section)
            self._state = NavigatorState.viewing_note(page)
            session.focus = Focus.NOTES
            return section

    def sync_page_from_current_note(self) -> int | None:
        """Jump the viewer to the page of the focused note."""
        with self._session.lock:
            session = self._session
            scope = self._scope()
            if scope is None:
                return None
            section = session.view.current_section()
            try:
                if section is None or not scope.contains(section):
                    raise UnparsablePageProperty(None, session.page_property)
                raw = section.get_property_inherited(session.page_property, stop=scope.anchor)
                page = parse_page(raw, session.page_property)
                if page > session.viewer.page_count():
                    raise UnparsablePageProperty(raw, session.page_property)
            except UnparsablePageProperty as exc:
                self._notify(str(exc))
                return None
            session.viewer.go_to_page(page)
            self._state = NavigatorState.viewing_note(page)
            return page

    def sync_to_previous_note(self) -> Section | None:
        return self._sync_to_adjacent_note(Direction.BACKWARD)

    def sync_to_next_note(self) -> Section | None:
        return self._sync_to_adjacent_note(Direction.FORWARD)

    def _current_page_note(self, scope: Scope, key: str) -> Section | None:
        """
        The page note owning the current position: the narrowed section, else
        the focused one, lifted to its nearest ancestor carrying `key`.
        """
        view = self._session.view
        start = view.narrowed if view.narrowed is not None else view.focus
        if start is None or start is scope.anchor or not scope.contains(start):
            return None
        node: Section | None = start
        while node is not None and node is not scope.anchor:
            if node.get_property(key) is not None:
                return node
            node = node.parent
        return start

    def _sync_to_adjacent_note(self, direction: Direction) -> Section | None:
        with self._session.lock:
            session = self._session
            scope = self._scope()
            if scope is None:
                return None
            key = session.page_property
            page_count = session.viewer.page_count()

            def has_page(section: Section) -> bool:
                page = page_of(section, key)
                return page is not None and page <= page_count

            current = self._current_page_note(scope, key)
            document = scope.document
            if direction is Direction.BACKWARD:
                found = (
                    document.find_backward(has_page, before=current, within=scope.anchor)
                    if current is not None
                    else None
                )
            else:
                found = document.find_forward(
                    has_page,
                    within=scope.anchor,
                    after=current,
                    skip_subtree=True,
                )
            if found is None:
                self._notify(MESSAGE_FIRST_NOTE if direction is Direction.BACKWARD else MESSAGE_NO_NEXT_NOTES)
                return None

            page = parse_page(found.get_property(key), key)
            session.viewer.go_to_page(page)
            session.view.narrow_to(found)
            session.view.reveal(found)
            self._state = NavigatorState.viewing_note(page)
            return found


__all__ = ["Navigator", "Notifier"]
