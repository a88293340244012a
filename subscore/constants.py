"""Centralized application constants — single source of truth for hardcoded values."""

# --- Auth ---
BEARER_PREFIX = "Bearer "
PUBLIC_PATHS = frozenset({"/api/users/register"})
TOKEN_LOG_PREFIX_CHARS = 20
UNAUTHORIZED_MESSAGE = "Authentication required"

# --- CORS ---
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

# --- Subscriptions ---
BILLING_CYCLE_MONTHLY = "monthly"
BILLING_CYCLE_YEARLY = "yearly"
DEFAULT_SUBSCRIPTION_STATUS = "active"

# --- Categories ---
CATEGORY_LOOKUP_CHUNK_SIZE = 500  # ids per IN (...) query

DEFAULT_CATEGORIES = [
    "Video",
    "Music",
    "Gaming",
    "News",
    "Education",
    "Software",
    "Cloud Storage",
    "Fitness",
    "Food",
    "Other",
]
