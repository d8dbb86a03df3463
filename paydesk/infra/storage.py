"""
Stockage local clé/valeur (équivalent du localStorage du navigateur).
- MemoryStore: dict du process, utilisé par défaut (pas de STORAGE_REDIS_URL)
- RedisStore: persistance Redis, clés préfixées par STORAGE_NAMESPACE
- Toute panne est remontée en StorageUnavailableError; les accesseurs typés décident du repli.
"""
from typing import Dict, Optional
import logging
import redis
from paydesk.config import STORAGE_REDIS_URL, STORAGE_NAMESPACE, USE_FAKE_REDIS_FOR_TESTS
from paydesk.errors import StorageUnavailableError

try:
    import fakeredis  # tests only
except Exception:
    fakeredis = None

logger = logging.getLogger(__name__)

_store = None


class MemoryStore:
    """Valeurs chaîne en mémoire. `available=False` simule un stockage indisponible."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StorageUnavailableError("memory store disabled")

    def get(self, key: str) -> Optional[str]:
        self._check()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self._data[key] = str(value)

    def delete(self, key: str) -> None:
        self._check()
        self._data.pop(key, None)

    def ping(self) -> bool:
        return self.available


class RedisStore:
    def __init__(self, client: "redis.Redis", namespace: str = STORAGE_NAMESPACE):
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self._client.get(self._key(key))
        except redis.RedisError as e:
            raise StorageUnavailableError(str(e)) from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), str(value))
        except redis.RedisError as e:
            raise StorageUnavailableError(str(e)) from e

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as e:
            raise StorageUnavailableError(str(e)) from e

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False


def get_store():
    """
    Retourne le store du process (créé à la première demande).
    - USE_FAKE_REDIS_FOR_TESTS=1: fakeredis (tests)
    - STORAGE_REDIS_URL défini: Redis
    - sinon: MemoryStore
    """
    global _store
    if _store is None:
        if USE_FAKE_REDIS_FOR_TESTS:
            if not fakeredis:
                raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 mais fakeredis n'est pas installé.")
            _store = RedisStore(fakeredis.FakeRedis(decode_responses=True))
        elif STORAGE_REDIS_URL:
            _store = RedisStore(redis.from_url(STORAGE_REDIS_URL, encoding="utf-8", decode_responses=True))
            logger.info("storage: redis namespace=%s", STORAGE_NAMESPACE)
        else:
            _store = MemoryStore()
            logger.info("storage: in-memory")
    return _store


def reset_store() -> None:
    """Oublie le store courant (utile pour les tests)."""
    global _store
    _store = None
