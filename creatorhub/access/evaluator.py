"""
Premium-content visibility gate.

``evaluate_access`` is the one rule deciding what a viewer may see and do
with a post. It is pure: subscription state is resolved by the caller
(see ``creatorhub.access.gate``) and passed in as a boolean.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


class InvalidInput(ValueError):
    """Post is missing a field the gate needs (strict mode only)."""


@dataclass(frozen=True)
class Viewer:
    id: Any = None
    is_owner: bool = False

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls(id=None, is_owner=False)

    @classmethod
    def for_post(cls, viewer_id, post) -> "Viewer":
        if viewer_id is None:
            return cls.anonymous()
        creator_id = _read_field(post, "creator_id")
        return cls(
            id=viewer_id,
            is_owner=creator_id is not _MISSING and creator_id is not None and creator_id == viewer_id,
        )


@dataclass(frozen=True)
class ContentAccess:
    can_view_media: bool
    can_view_full_text: bool
    can_interact: bool

    @classmethod
    def granted(cls) -> "ContentAccess":
        return cls(True, True, True)

    @classmethod
    def denied(cls) -> "ContentAccess":
        return cls(False, False, False)

    @property
    def locked(self) -> bool:
        return not self.can_view_media

    def to_dict(self) -> dict:
        return {
            "can_view_media": self.can_view_media,
            "can_view_full_text": self.can_view_full_text,
            "can_interact": self.can_interact,
        }


def _read_field(post, name):
    if isinstance(post, Mapping):
        return post.get(name, _MISSING)
    return getattr(post, name, _MISSING)


def is_public_post(post) -> bool:
    """Only an explicit ``True`` counts as public."""
    if post is None:
        return False
    return _read_field(post, "is_public") is True


def _malformed(post, name: str, strict: bool) -> ContentAccess:
    if strict:
        raise InvalidInput(f"Post field '{name}' is required")
    logger.warning(
        "Access denied: post field %s missing", name,
        extra={"post_id": _read_field(post, "id")},
    )
    return ContentAccess.denied()


def evaluate_access(post, viewer: Viewer | None, subscription_active: bool = False, *, strict: bool = False) -> ContentAccess:
    """
    Decide the access flags for ``viewer`` on ``post``.

    All three flags share one predicate:
    ``is_public OR viewer.is_owner OR subscription_active``.
    A public post is granted without looking at ``creator_id``. Missing or
    null ``is_public``, or a premium post without ``creator_id``, fail
    closed, or raise ``InvalidInput`` when ``strict`` is set.
    """
    if post is None:
        if strict:
            raise InvalidInput("Post is required")
        logger.warning("Access denied: no post given")
        return ContentAccess.denied()

    is_public = _read_field(post, "is_public")
    if is_public is _MISSING or is_public is None:
        return _malformed(post, "is_public", strict)
    if is_public is True:
        return ContentAccess.granted()

    creator_id = _read_field(post, "creator_id")
    if creator_id is _MISSING or creator_id is None:
        return _malformed(post, "creator_id", strict)

    viewer = viewer or Viewer.anonymous()
    # There is no anonymous ownership and no anonymous subscription.
    if viewer.id is None:
        return ContentAccess.denied()

    allowed = bool(viewer.is_owner) or subscription_active is True
    return ContentAccess(allowed, allowed, allowed)
