"""
Application configuration.

Environment-based config classes following the 12-factor app methodology.
Sensitive values are read exclusively from environment variables.
"""

import os


class Config:
    """Base configuration shared by all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")

    # MongoDB
    MONGODB_URI = os.environ.get(
        "MONGODB_URI", "mongodb://localhost:27017/tskauto"
    )

    # Invoice history
    LEDGER_BACKEND = os.environ.get("LEDGER_BACKEND", "mongo")
    LEDGER_CAPACITY = 200
    HISTORY_PAGE_SIZE = 12
    VAT_RATE = "0.15"

    # Supabase (hosted auth)
    SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
    SUPABASE_TIMEOUT = float(os.environ.get("SUPABASE_TIMEOUT", "10"))

    # Dealer details printed on invoices
    DEALER = {
        "name": "TSK AUTO",
        "tagline": "Vehicle Trading Specialists",
        "address_lines": [
            "278 Weltevreden Road, Blackheath, Johannesburg",
            "Gauteng, South Africa - Postal Code: 2001",
        ],
        "phone": "+27 67 187 2085, +27 61 100 4801",
        "email": "Tskauto@gmail.com",
        "vat_number": "4850123456",
    }

    BANK_INFO = {
        "name": "FNB",
        "account_number": "63193229482",
        "holder_name": "TSK Auto",
        "branch_number": "250655",
        "swift_code": "FIRNZAJJ",
    }


class DevelopmentConfig(Config):
    """Local development, debug on."""

    DEBUG = True


class ProductionConfig(Config):
    """Production: expects MONGODB_URI, SECRET_KEY and Supabase keys in env."""

    DEBUG = False


class TestingConfig(Config):
    """Automated tests: in-process ledger store, fake Supabase project."""

    TESTING = True
    LEDGER_BACKEND = "memory"
    SUPABASE_URL = "https://project.supabase.test"
    SUPABASE_ANON_KEY = "test-anon-key"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
