"""
Per-request cache of "is the viewer actively subscribed to this creator".

One store lives on ``flask.g`` for the duration of a request. Nothing is
shared across requests: the next request re-fetches, which is the whole
staleness policy.
"""
import logging

from flask import g
from sqlalchemy.exc import SQLAlchemyError

from creatorhub.repositories import subscription_repository

logger = logging.getLogger(__name__)


class SubscriptionStore:
    def __init__(self, viewer_id=None):
        self.viewer_id = viewer_id
        self._cache: dict[tuple, bool] = {}

    def check_subscription(self, creator_id) -> bool:
        """Resolve to ``False`` for anonymous viewers and on any lookup error."""
        if self.viewer_id is None or creator_id is None:
            return False

        key = (self.viewer_id, creator_id)
        if key in self._cache:
            return self._cache[key]

        try:
            active = subscription_repository.has_active(self.viewer_id, creator_id)
        except SQLAlchemyError:
            logger.warning(
                "Subscription check failed for viewer=%s creator=%s",
                self.viewer_id, creator_id,
                exc_info=True,
            )
            # Not cached: the next check in this request may succeed.
            return False

        self._cache[key] = bool(active)
        return self._cache[key]

    def prefetch(self, creator_ids) -> dict:
        """Resolve many creators with a single query and fill the cache."""
        if self.viewer_id is None:
            return {}

        pending = {
            creator_id for creator_id in creator_ids
            if creator_id is not None and (self.viewer_id, creator_id) not in self._cache
        }
        if pending:
            try:
                active_ids = subscription_repository.get_active_creator_ids(
                    self.viewer_id, pending
                )
            except SQLAlchemyError:
                logger.warning(
                    "Batched subscription check failed for viewer=%s",
                    self.viewer_id,
                    exc_info=True,
                )
                return {creator_id: False for creator_id in creator_ids}

            for creator_id in pending:
                self._cache[(self.viewer_id, creator_id)] = creator_id in active_ids

        return {
            creator_id: self._cache.get((self.viewer_id, creator_id), False)
            for creator_id in creator_ids
        }


def get_subscription_store(viewer_id) -> SubscriptionStore:
    store = g.get("subscription_store")
    if store is None or store.viewer_id != viewer_id:
        store = SubscriptionStore(viewer_id)
        g.subscription_store = store
    return store
