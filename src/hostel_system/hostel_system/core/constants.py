"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SESSION_TOKEN_BYTES = 32
SESSION_TOKEN_KEY = "token"
MIN_PASSWORD_LENGTH = 6
DEFAULT_PAYMENT_METHOD = "CASH"
DEFAULT_PRIORITY = "NORMAL"
MONEY_PLACES = 2

# Column limits: INT and DECIMAL(10, 2)
MAX_INT_VALUE = 2147483647
MIN_INT_VALUE = -2147483648
MAX_MONEY_VALUE = "99999999.99"
