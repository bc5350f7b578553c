class CredentialStoreError(Exception):
    """Raised when user credentials cannot be persisted."""
