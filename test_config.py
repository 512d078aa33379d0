"""
Settings, app factory and logging tests
"""
import logging
import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from decimal import Decimal

from storefront import create_app, db
from storefront.config import Settings
from storefront.logging_config import CONSOLE_HANDLER_NAME, RequestFormatter
from storefront.models import Category, Product
from storefront.seed import SAMPLE_CATEGORIES, SAMPLE_PRODUCTS, seed_database


def test_settings_defaults(monkeypatch):
    for name in ('STOREFRONT_TAX_RATE', 'STOREFRONT_FEATURED_LIMIT', 'STOREFRONT_DATABASE_URL'):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.tax_rate == Decimal('0.08')
    assert settings.featured_limit == 8
    assert settings.low_stock_threshold == 5
    assert settings.database_url == 'sqlite:///storefront.db'
    assert settings.seed_on_startup is False


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv('STOREFRONT_TAX_RATE', '0.1')
    monkeypatch.setenv('STOREFRONT_FEATURED_LIMIT', '4')
    settings = Settings(_env_file=None)

    assert settings.tax_rate == Decimal('0.1')
    config = settings.to_flask_config()
    assert config['TAX_RATE'] == Decimal('0.1')
    assert config['FEATURED_LIMIT'] == 4
    assert config['SQLALCHEMY_TRACK_MODIFICATIONS'] is False


def test_create_app_applies_overrides():
    app = create_app({'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://', 'TAX_RATE': Decimal('0.2')})
    assert app.config['TESTING'] is True
    assert app.config['TAX_RATE'] == Decimal('0.2')
    assert 'seed-db' in app.cli.commands


def test_logging_handler_is_not_duplicated():
    create_app({'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://'})
    app = create_app({'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://'})
    names = [handler.get_name() for handler in app.logger.handlers]
    assert names.count(CONSOLE_HANDLER_NAME) == 1


def test_request_formatter_outside_request():
    formatter = RequestFormatter('%(method)s %(url)s %(message)s')
    record = logging.LogRecord('storefront', logging.INFO, __file__, 1, 'hello', None, None)
    assert formatter.format(record) == 'N/A N/A hello'


def test_seed_is_idempotent():
    app = create_app({'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://'})
    with app.app_context():
        db.create_all()
        assert seed_database() is True
        assert seed_database() is False
        assert Category.query.count() == len(SAMPLE_CATEGORIES)
        assert Product.query.count() == len(SAMPLE_PRODUCTS)

        sweater = Product.query.filter_by(slug='knit-sweater').one()
        assert sweater.to_dict()['stockLevel'] == 'Low Stock'
        db.drop_all()


def test_seed_command():
    app = create_app({'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://'})
    runner = app.test_cli_runner()
    result = runner.invoke(args=['seed-db'])
    assert result.exit_code == 0
    assert f'Seeded {len(SAMPLE_PRODUCTS)} products.' in result.output
