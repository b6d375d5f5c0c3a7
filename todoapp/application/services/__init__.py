# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .password_hashing import WerkzeugPasswordHasher
from .tokens import ACCESS_TOKEN_EXPIRATION_MS, JwtTokenService

__all__ = ["ACCESS_TOKEN_EXPIRATION_MS", "JwtTokenService", "WerkzeugPasswordHasher"]
