"""
OAuth1 client configuration. Endpoint URLs and paths are public identifiers;
consumer key/secret come from env only.
"""
import os

# Consumer credentials issued by the provider when the app was registered
CONSUMER_KEY = os.environ.get("OAUTH1_CONSUMER_KEY", "")
CONSUMER_SECRET = os.environ.get("OAUTH1_CONSUMER_SECRET", "")

# Provider endpoints (temporary credentials, resource owner authorization, token credentials)
REQUEST_TOKEN_URL = os.environ.get("OAUTH1_REQUEST_TOKEN_URL", "http://127.0.0.1:9000/oauth/request_token")
AUTHORIZE_URL = os.environ.get("OAUTH1_AUTHORIZE_URL", "http://127.0.0.1:9000/oauth/authorize")
ACCESS_TOKEN_URL = os.environ.get("OAUTH1_ACCESS_TOKEN_URL", "http://127.0.0.1:9000/oauth/access_token")

# Where the provider sends the user back; must point at CALLBACK_PATH on this app
CALLBACK_URL = os.environ.get("OAUTH1_CALLBACK_URL", "http://127.0.0.1:8000/callback")

LOGIN_PATH = os.environ.get("OAUTH1_LOGIN_PATH", "/login")
CALLBACK_PATH = os.environ.get("OAUTH1_CALLBACK_PATH", "/callback")

# Seconds before a provider call is abandoned
HTTP_TIMEOUT = float(os.environ.get("OAUTH1_HTTP_TIMEOUT", "10"))
