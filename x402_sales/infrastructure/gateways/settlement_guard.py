"""Claims on payment proofs so that one proof is never settled twice.

A proof is identified by a fingerprint of its scheme payload and the
requirement it is settled against. The gateway claims the fingerprint
before calling the facilitator and releases it when settlement fails, so
only a successfully settled proof stays claimed (until the TTL expires).
"""
import hashlib
import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Dict

import redis

from x402_sales.domain.entities.payment import PaymentProof, PaymentRequirements
from x402_sales.infrastructure.gateways.x402_mapping import to_x402_requirements


def proof_fingerprint(proof: PaymentProof, requirements: PaymentRequirements) -> str:
    """Stable sha256 over the canonical JSON of the proof payload and requirement."""
    canonical = json.dumps(
        {
            "payload": proof.payload,
            "requirements": to_x402_requirements(requirements).model_dump(mode="json", by_alias=True),
        },
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class SettlementGuard(ABC):
    """Store of in-flight or completed settlement claims."""

    @abstractmethod
    def claim(self, fingerprint: str) -> bool:
        """
        Claim a fingerprint.

        Returns:
            True if this caller now owns the claim, False if already claimed
        """
        pass

    @abstractmethod
    def release(self, fingerprint: str) -> None:
        """Drop a claim so the proof may be settled again."""
        pass


class InMemorySettlementGuard(SettlementGuard):
    """Process-local claims; only protects a single worker process."""

    def __init__(self, ttl: int = 3600):
        self.ttl = ttl
        self._claims: Dict[str, float] = {}
        self._lock = threading.Lock()

    def claim(self, fingerprint: str) -> bool:
        now = time.monotonic()
        with self._lock:
            expires_at = self._claims.get(fingerprint)
            if expires_at is not None and expires_at > now:
                return False
            self._claims[fingerprint] = now + self.ttl
            return True

    def release(self, fingerprint: str) -> None:
        with self._lock:
            self._claims.pop(fingerprint, None)


class RedisSettlementGuard(SettlementGuard):
    """Claims shared by all workers, stored with SET NX EX."""

    def __init__(self, redis_client: redis.Redis, ttl: int = 3600, key_prefix: str = "settlement:"):
        """
        Args:
            redis_client: Redis client instance (Dependency Injection)
            ttl: Claim lifetime in seconds
            key_prefix: Prefix for claim keys
        """
        self.redis = redis_client
        self.ttl = ttl
        self._key_prefix = key_prefix
        self._logger = logging.getLogger(__name__)

    def _get_key(self, fingerprint: str) -> str:
        return f"{self._key_prefix}{fingerprint}"

    def claim(self, fingerprint: str) -> bool:
        try:
            return bool(self.redis.set(self._get_key(fingerprint), "1", nx=True, ex=self.ttl))
        except redis.RedisError as e:
            self._logger.error(f"Failed to claim settlement {fingerprint[:12]}: {e}")
            raise

    def release(self, fingerprint: str) -> None:
        try:
            self.redis.delete(self._get_key(fingerprint))
        except redis.RedisError as e:
            # The claim expires on its own; a stuck claim only delays a retry
            self._logger.error(f"Failed to release settlement {fingerprint[:12]}: {e}")
