"""OAuth 2.0 / OpenID Connect client for user sign-in."""
import secrets
import requests
from urllib.parse import urlencode
from flask import current_app, session
from typing import Dict, Optional, Any


class OAuthService:
    """Authorization-code flow against the configured identity provider."""

    def __init__(self):
        self.client_id = current_app.config['OAUTH_CLIENT_ID']
        self.client_secret = current_app.config['OAUTH_CLIENT_SECRET']
        self.authorization_base_url = current_app.config['OAUTH_AUTHORIZE_URL']
        self.token_url = current_app.config['OAUTH_TOKEN_URL']
        self.userinfo_url = current_app.config['OAUTH_USERINFO_URL']
        self.scope = current_app.config['OAUTH_SCOPES']
        self.timeout = current_app.config['OAUTH_TIMEOUT_SECONDS']

    def get_authorization_url(self, redirect_uri: str) -> str:
        """Generate authorization URL for OAuth flow."""
        # Generate and store state for CSRF protection
        state = secrets.token_urlsafe(32)
        session['oauth_state'] = state

        params = {
            'client_id': self.client_id,
            'redirect_uri': redirect_uri,
            'scope': ' '.join(self.scope),
            'response_type': 'code',
            'state': state,
            'prompt': 'select_account'
        }

        return f"{self.authorization_base_url}?{urlencode(params)}"

    def exchange_code_for_token(self, code: str, redirect_uri: str, state: Optional[str]) -> Optional[Dict[str, Any]]:
        """Exchange authorization code for access token."""
        # Verify state parameter for CSRF protection
        expected_state = session.pop('oauth_state', None)
        if not state or state != expected_state:
            current_app.logger.warning("OAuth state mismatch - possible CSRF attack")
            return None

        data = {
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'code': code,
            'grant_type': 'authorization_code',
            'redirect_uri': redirect_uri
        }

        try:
            response = requests.post(
                self.token_url,
                data=data,
                headers={'Accept': 'application/json'},
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            current_app.logger.error(f"Error exchanging code for token: {e}")
            return None

    def get_user_info(self, access_token: str) -> Optional[Dict[str, Any]]:
        """Get the user's profile claims using the access token.

        Providers that answer with ``id`` instead of the OpenID ``sub``
        claim are normalised so callers always see ``sub``.
        """
        headers = {'Authorization': f'Bearer {access_token}'}

        try:
            response = requests.get(
                self.userinfo_url,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
            profile = response.json()
        except requests.RequestException as e:
            current_app.logger.error(f"Error fetching user info: {e}")
            return None

        if 'sub' not in profile and 'id' in profile:
            profile['sub'] = str(profile['id'])
        if not profile.get('sub'):
            current_app.logger.error("User info response has no subject identifier")
            return None
        return profile
