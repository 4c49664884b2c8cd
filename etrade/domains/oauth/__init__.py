"""OAuth 1.0a domain: nonce, endpoint resolution, signing and token flows."""
