"""
Constants for the ConvertKit API client

This module contains the constant values used throughout the SDK, including the
API endpoints, timeouts, content types, debug log defaults and the enumerations
that resource methods validate locally before a request is sent.
"""

# Export list for explicit module interface definition
__all__ = [
    # API Configuration Constants
    'DEFAULT_API_BASE_URL',
    'DEFAULT_API_VERSION',
    'DEFAULT_TIMEOUT_SECONDS',
    'DEFAULT_CONTENT_TYPE',
    'API_KEY_HEADER',
    'USER_AGENT_PRODUCT',
    # OAuth Configuration
    'OAUTH_AUTHORIZE_URL',
    'OAUTH_TOKEN_URL',
    # Logging Configuration
    'DEBUG_LOG_CHANNEL',
    'DEFAULT_DEBUG_LOG_FILE',
    # Settings
    'ENV_PREFIX',
    # Resource enumerations
    'SUBSCRIBER_STATES',
    'SUBSCRIBER_SORT_FIELDS',
    'SORT_ORDERS',
    'FORM_STATUSES',
    'RESOURCE_TYPES',
    'WEBHOOK_EVENTS',
    'WEBHOOK_EVENT_PARAMETERS',
]

# Default ConvertKit API configuration
DEFAULT_API_BASE_URL = "https://api.convertkit.com"
DEFAULT_API_VERSION = "v4"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CONTENT_TYPE = "application/json"

# Legacy API keys travel in this header; the secret never does
API_KEY_HEADER = "X-Api-Key"

# User-Agent product token: ConvertKitPythonSDK/<version>;Python/<version>
USER_AGENT_PRODUCT = "ConvertKitPythonSDK"

# OAuth endpoints
OAUTH_AUTHORIZE_URL = "https://app.convertkit.com/oauth/authorize"
OAUTH_TOKEN_URL = "https://api.convertkit.com/oauth/token"

# Debug log configuration
DEBUG_LOG_CHANNEL = "ck-debug"
DEFAULT_DEBUG_LOG_FILE = "logs/debug.log"

# Settings keys are read from CONVERTKIT_* environment variables
ENV_PREFIX = "CONVERTKIT_"

# Subscriber states accepted by list and create endpoints
SUBSCRIBER_STATES = ["active", "bounced", "cancelled", "complained", "inactive"]

# Sort options for GET /subscribers
SUBSCRIBER_SORT_FIELDS = ["id", "created_at", "updated_at"]
SORT_ORDERS = ["asc", "desc"]

# Form status filter for GET /forms
FORM_STATUSES = ["active", "archived", "trashed", "all"]

# Resources served by the cached get_resources() lookup
RESOURCE_TYPES = ["forms", "landing_pages", "subscription_forms", "tags"]

# Webhook events supported by POST /webhooks
WEBHOOK_EVENTS = [
    "subscriber.subscriber_activate",
    "subscriber.subscriber_unsubscribe",
    "subscriber.subscriber_bounce",
    "subscriber.subscriber_complain",
    "subscriber.form_subscribe",
    "subscriber.course_subscribe",
    "subscriber.course_complete",
    "subscriber.link_click",
    "subscriber.product_purchase",
    "subscriber.tag_add",
    "subscriber.tag_remove",
    "purchase.purchase_create",
]

# Events that need an extra identifier, and the key it is sent under
WEBHOOK_EVENT_PARAMETERS = {
    "subscriber.form_subscribe": "form_id",
    "subscriber.course_subscribe": "sequence_id",
    "subscriber.course_complete": "sequence_id",
    "subscriber.link_click": "initiator_value",
    "subscriber.product_purchase": "product_id",
    "subscriber.tag_add": "tag_id",
    "subscriber.tag_remove": "tag_id",
}
