from firehearts.infra.sql.credential_store import SQLAlchemyCredentialStore

__all__ = ["SQLAlchemyCredentialStore"]
