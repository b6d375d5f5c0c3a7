# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.domain.users.entities import User
from todoapp.shared.errors.base import NotAuthenticatedError

from .results import UserProfile


class GetCurrentUserUseCase:
    def execute(self, identity: User | None) -> UserProfile:
        if identity is None:
            raise NotAuthenticatedError()
        return UserProfile.from_user(identity)
