"""
New Relic integration helpers
Custom attributes for cart/order tracking, custom events and error reporting.
Every call is a no-op when the agent is not running.
"""
import logging
from typing import Any, Dict, Optional

import newrelic.agent
from flask import request

logger = logging.getLogger(__name__)

# URL parameters that identify the cart or order a request touches
TRACKED_VIEW_ARGS = {
    'cart_id': 'cart.id',
    'item_id': 'cartItem.id',
    'order_id': 'order.id',
}


def set_custom_attributes(attributes: Dict[str, Any]):
    try:
        for key, value in attributes.items():
            if value is not None:
                newrelic.agent.add_custom_attribute(key, value)
    except Exception as e:
        logger.error(f"Failed to set New Relic custom attributes: {e}")


def record_custom_event(event_type: str, params: Dict[str, Any]):
    """
    Record a custom event in New Relic

    Args:
        event_type (str): event type name, e.g. 'OrderCreated'
        params (Dict[str, Any]): event attributes
    """
    try:
        newrelic.agent.record_custom_event(event_type, params)
    except Exception as e:
        logger.error(f"Failed to record New Relic custom event {event_type}: {e}")


def report_error(error: Exception, category: str, context: Optional[Dict[str, Any]] = None):
    try:
        attributes = {'error.category': category}
        attributes.update(context or {})
        newrelic.agent.notice_error(
            error=(type(error), error, error.__traceback__),
            attributes=attributes
        )
    except Exception as e:
        logger.error(f"Failed to report error to New Relic: {e}")


def register_request_attributes(app):
    @app.before_request
    def add_newrelic_request_attributes():
        """Attach cart/order identifiers from the URL as custom attributes"""
        view_args = request.view_args or {}
        set_custom_attributes({
            attribute: str(view_args[arg])
            for arg, attribute in TRACKED_VIEW_ARGS.items()
            if arg in view_args
        })
