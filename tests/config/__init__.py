"""Test configuration constants for oauth2-twitter tests.

None of these are real credentials; every HTTP call is mocked.
"""

TEST_CLIENT_ID = "test-client-id"
TEST_CLIENT_SECRET = "test-client-secret"
TEST_REDIRECT_URI = "https://app.example.com/callback"

__all__ = [
    "TEST_CLIENT_ID",
    "TEST_CLIENT_SECRET",
    "TEST_REDIRECT_URI",
]
