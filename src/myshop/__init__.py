"""
MyShop storefront core

- config: explicit runtime settings
- auth: signed seller/customer session cookies
- retry: bounded exponential-backoff retry for transient database calls
- db / models: SQLAlchemy engine and schema
- services: accounts (argon2 passwords) and onboarding progress
- routers / app: FastAPI JSON API
"""

__version__ = "0.1.0"
