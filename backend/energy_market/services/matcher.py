"""Matcher — finds the first producer able to serve a consumer.

Invariants:
    - find_match never mutates or reserves a record and takes no locks
    - The result is advisory: settlement re-validates against current records
"""

import logging

from energy_market.core.domain_types import ProducerId, RecordKind
from energy_market.core.enforce_fields import require_record
from energy_market.core.match_policy import select_first_fit
from energy_market.core.repository_protocols import LedgerStore

logger = logging.getLogger(__name__)


class Matcher:
    def __init__(self, store: LedgerStore):
        self._store = store

    def find_match(self, consumer_id: str) -> ProducerId | None:
        """Producer id of the first eligible producer, or None (no match)."""
        consumer = require_record(
            RecordKind.CONSUMER, consumer_id, self._store.consumers.get(consumer_id),
        )
        producer = select_first_fit(consumer, self._store.producers.values())
        if producer is None:
            logger.info("No match found", extra={"consumer_id": consumer_id})
            return None
        logger.info(
            "Match found",
            extra={"consumer_id": consumer_id, "producer_id": producer.id},
        )
        return producer.id
