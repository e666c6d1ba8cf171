from firehearts.infra.redis.redis_credential_store import RedisCredentialStore

__all__ = ["RedisCredentialStore"]
