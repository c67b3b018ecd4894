# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- HMAC-signed session tokens (itsdangerous)
- Seller and customer session cookies built on those tokens
"""
