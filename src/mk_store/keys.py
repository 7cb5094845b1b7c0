"""Key namespaces of the durable store.

Each namespace is read and written independently; there are no
cross-namespace transactions. Backends add STORE_KEY_PREFIX themselves.
"""

PRODUCTS_KEY = "products"
USER_KEY = "user"
FAVORITES_KEY = "favorites"
REVIEWS_KEY = "reviews"
CHATS_KEY = "chats"

ALL_KEYS = (PRODUCTS_KEY, USER_KEY, FAVORITES_KEY, REVIEWS_KEY, CHATS_KEY)
