"""
================================================================================
Driver Session Proxy
================================================================================

Stand-in for a browser session that only opens the real browser when
something actually needs it.

States:
    UNREALIZED  no browser yet; listeners may be registered
    REALIZED    the factory has produced a session; calls pass straight through

Realization happens at most once per open/close cycle. Every registered
on-open listener is called with the new session right after realization;
a listener registered later is called immediately.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from .exceptions import UnsupportedDriverError
from .locators import Locator
from .session import Element, Session


SessionFactory = Callable[[], Session]
OpenListener = Callable[[Session], None]


class ProxyState(Enum):
    UNREALIZED = "unrealized"
    REALIZED = "realized"


class DriverSessionProxy:
    """
    Session that defers browser creation until first real use.

    Usage:
        proxy = DriverSessionProxy(PlaywrightSessionFactory())
        proxy.register_listener(lambda session: session.navigate(home_url))
        proxy.title()     # browser opens here, listener fires, then title()
    """

    def __init__(self, factory: SessionFactory):
        """
        Args:
            factory: Zero-argument callable returning a new Session
        """
        self._factory = factory
        self._session: Optional[Session] = None
        self._listeners: List[OpenListener] = []
        self.state = ProxyState.UNREALIZED

    @property
    def is_realized(self) -> bool:
        return self.state is ProxyState.REALIZED

    @property
    def proxied_session(self) -> Session:
        """The real session, realizing it if necessary."""
        if self._session is None:
            self._realize()
        return self._session

    def _realize(self) -> None:
        try:
            session = self._factory()
        except Exception as e:
            logger.error(f"Could not open a browser session: {e}")
            raise UnsupportedDriverError(
                f"Could not instantiate the browser session: {e}"
            ) from e

        self._session = session
        self.state = ProxyState.REALIZED
        logger.debug("Browser session realized")
        for listener in list(self._listeners):
            listener(session)

    def register_listener(self, listener: OpenListener) -> None:
        """Call `listener(session)` once the session opens (now, if already open)."""
        self._listeners.append(listener)
        if self._session is not None:
            listener(self._session)

    # =========================================================================
    # Session protocol
    # =========================================================================

    def navigate(self, url: str) -> None:
        self.proxied_session.navigate(url)

    @property
    def current_url(self) -> str:
        return self.proxied_session.current_url

    def title(self) -> str:
        return self.proxied_session.title()

    def find_elements(self, locator: Locator) -> List[Element]:
        return self.proxied_session.find_elements(locator)

    def find_element(self, locator: Locator) -> Element:
        return self.proxied_session.find_element(locator)

    def close(self) -> None:
        """Close the real session, if any, and go back to UNREALIZED."""
        if self._session is None:
            return
        session, self._session = self._session, None
        self.state = ProxyState.UNREALIZED
        session.close()
        logger.debug("Browser session closed")

    def __repr__(self) -> str:
        return f"<DriverSessionProxy {self.state.value}>"


__all__ = ["DriverSessionProxy", "OpenListener", "ProxyState", "SessionFactory"]
