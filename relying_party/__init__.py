"""OAuth2 authorization-code relying party."""
