"""
Configuration management for the storefront API
"""
from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    database_url: str = Field(
        default="sqlite:///storefront.db",
        description="SQLAlchemy database URL"
    )

    secret_key: str = Field(
        default="dev-secret-key-change-in-production",
        description="Flask secret key"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # Pricing
    tax_rate: Decimal = Field(
        default=Decimal("0.08"),
        ge=0,
        description="Tax rate applied to the cart subtotal"
    )

    # Catalog
    featured_limit: int = Field(
        default=8,
        gt=0,
        description="Maximum number of featured products"
    )

    low_stock_threshold: int = Field(
        default=5,
        ge=0,
        description="Stock at or below this count is reported as Low Stock"
    )

    seed_on_startup: bool = Field(
        default=False,
        description="Create tables and load sample data when the app starts"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STOREFRONT_",
        extra="ignore"
    )

    def to_flask_config(self):
        """Map settings onto Flask config keys"""
        return {
            'SECRET_KEY': self.secret_key,
            'SQLALCHEMY_DATABASE_URI': self.database_url,
            'SQLALCHEMY_TRACK_MODIFICATIONS': False,
            'LOG_LEVEL': self.log_level.upper(),
            'TAX_RATE': self.tax_rate,
            'FEATURED_LIMIT': self.featured_limit,
            'LOW_STOCK_THRESHOLD': self.low_stock_threshold,
            'SEED_ON_STARTUP': self.seed_on_startup,
        }


def get_settings() -> Settings:
    return Settings()
