"""Firebase authentication: session lifecycle and ID token claims."""
