from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()


def create_app(test_config=None):
    app = Flask(__name__)

    # Configuration
    from storefront.config import get_settings
    app.config.from_mapping(get_settings().to_flask_config())
    if test_config:
        app.config.update(test_config)

    # Setup logging
    from storefront.logging_config import setup_logging
    setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # New Relic custom attributes for cart/order tracking
    from storefront.monitoring import register_request_attributes
    register_request_attributes(app)

    # Error handlers
    from storefront.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from storefront.routes import main, categories, products, cart, orders, admin
    app.register_blueprint(main.bp)
    app.register_blueprint(categories.bp)
    app.register_blueprint(products.bp)
    app.register_blueprint(cart.bp)
    app.register_blueprint(orders.bp)
    app.register_blueprint(admin.bp)

    # CLI
    from storefront.seed import register_commands
    register_commands(app)

    if app.config.get('SEED_ON_STARTUP'):
        from storefront.seed import seed_database
        with app.app_context():
            db.create_all()
            seed_database()

    return app
