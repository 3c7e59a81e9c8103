"""
Bearer authentication for HTTP clients.

Attaches a module's current token to outgoing httpx requests. The token is
looked up through the session manager on every request, never cached.
"""

import logging
from typing import Generator

import httpx

from ..session import Module, ModuleSessionManager

logger = logging.getLogger(__name__)


class ModuleTokenAuth(httpx.Auth):
    """
    httpx auth flow for one module's session.

    Usage:
        client = httpx.Client(auth=ModuleTokenAuth(manager, "restaurant"))
    """

    def __init__(self, manager: ModuleSessionManager, module):
        """
        Initialize auth flow.

        Args:
            manager: Session manager holding the module's credential
            module: Module whose token is attached
        """
        self.manager = manager
        self.module = Module(module)

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        state = self.manager.status(self.module)
        if state.authenticated:
            request.headers["Authorization"] = f"Bearer {state.token}"
        else:
            logger.debug(f"No live {self.module.value} session, sending request without credentials")
        yield request
