"""oauth2-twitter

OAuth 2.0 authorization code + PKCE client for Twitter/X, built on a
provider-agnostic engine.
"""

from importlib.metadata import PackageNotFoundError, version

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    __version__ = version("oauth2-twitter")
except PackageNotFoundError:
    # Fallback for source checkouts
    __version__ = "0.1.0"
__author__ = "oauth2-twitter contributors"
