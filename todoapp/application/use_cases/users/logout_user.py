"""Use-case for ending an authenticated session."""

from __future__ import annotations

from todoapp.domain.users.entities import User
from todoapp.shared.logging import logger


class LogoutUserUseCase:
    """Stateless logout.

    There is no server-side session or revocation list, so tokens issued
    before logout remain valid until they expire. The caller is responsible
    for dropping the request-scoped identity.
    """

    def execute(self, identity: User | None) -> None:
        if identity is None:
            logger.debug("auth.logout: no identity on request")
            return
        logger.info(f"auth.logout: ok user_id={identity.id}")
