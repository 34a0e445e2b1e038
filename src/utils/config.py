# runtime settings, read once from the environment
import os

DB_PATH = os.getenv("STOREFRONT_DB_PATH", "data/storefront.sqlite")
DEBUG = bool(os.getenv("STOREFRONT_DEBUG"))

# keys in the storage table
SNAPSHOT_KEY = "storefront-data"
SESSION_LOGGED_IN_KEY = "isLoggedIn"
SESSION_ADMIN_KEY = "isAdmin"
SESSION_ACCOUNT_KEY = "currentAccount"

ORDER_ID_PREFIX = "ORD-"
