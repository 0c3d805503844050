"""Firebase endpoint constants.

These constants are the single source of truth for the hosted backends we
talk to. The auth client builds its identity URLs from them and the data
client builds its document URLs from them. The auth client also accepts
endpoint overrides as constructor arguments.
"""

# Identity Toolkit: password and anonymous sign-in
IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
SIGN_IN_WITH_PASSWORD_PATH = "accounts:signInWithPassword"
SIGN_UP_PATH = "accounts:signUp"

# Secure Token service: refresh-token exchange
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

# Firestore REST surface
FIRESTORE_URL = "https://firestore.googleapis.com/v1"
DEFAULT_DATABASE = "(default)"
RUN_QUERY_SUFFIX = ":runQuery"

# Collection holding the category documents. The spelling matches the
# collection that already exists in the production project.
CATEGORIES_COLLECTION = "FoodBuilder-Cathegories"

# Tokens are treated as expired this many seconds before Firebase says so.
TOKEN_EXPIRY_MARGIN_SECONDS = 60

# One client-wide timeout, applied to every request.
DEFAULT_TIMEOUT_SECONDS = 30.0


def documents_url(project_id: str, database: str = DEFAULT_DATABASE) -> str:
    """Root of a project's document tree."""
    return f"{FIRESTORE_URL}/projects/{project_id}/databases/{database}/documents"
