"""
Logging configuration with request context
"""
import logging
import sys
from flask import has_request_context, request
from flask.logging import default_handler

CONSOLE_HANDLER_NAME = 'storefront-console'


class RequestFormatter(logging.Formatter):
    """Custom formatter that adds request context to logs"""

    def format(self, record):
        if has_request_context():
            record.url = request.url
            record.method = request.method
            record.remote_addr = request.remote_addr
        else:
            record.url = 'N/A'
            record.method = 'N/A'
            record.remote_addr = 'N/A'

        return super().format(record)


def setup_logging(app):
    """
    Setup logging configuration for the Flask app
    New Relic captures these logs when the agent is configured
    """
    level = logging.getLevelName(app.config.get('LOG_LEVEL', 'INFO'))
    if not isinstance(level, int):
        level = logging.INFO

    formatter = RequestFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - '
        '[%(method)s %(url)s] - '
        '[IP: %(remote_addr)s] - '
        '%(message)s'
    )

    # Console handler, shared by module loggers under the package name
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure app logger
    app.logger.setLevel(level)
    for handler in list(app.logger.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            app.logger.removeHandler(handler)
    app.logger.addHandler(console_handler)

    # Prevent duplicate logs
    app.logger.removeHandler(default_handler)
    app.logger.propagate = False

    app.logger.info('Application logging configured', extra={
        'event_type': 'app_startup',
        'environment': app.config.get('ENV', 'unknown')
    })

    return app.logger
