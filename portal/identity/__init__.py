"""Identity: principals, token issuer/verifier and access policy."""
