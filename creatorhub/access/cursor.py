class MediaCursor:
    """Display index over a post's ordered media.

    Navigation only moves while ``enabled`` (the viewer can see the media);
    otherwise every move is a no-op. Binding a different post resets to 0.
    """

    def __init__(self, post=None, enabled: bool = False):
        self._post = None
        self._media = []
        self._count = 0
        self.index = 0
        self.enabled = enabled
        if post is not None:
            self.bind(post, enabled=enabled)

    @property
    def count(self) -> int:
        return self._count

    @property
    def current(self):
        return self._media[self.index] if self._count else None

    def bind(self, post, enabled: bool | None = None):
        if post is not self._post:
            self._post = post
            self.index = 0
        media = getattr(post, "media", None)
        if media is None and isinstance(post, dict):
            media = post.get("media")
        self._media = list(media or [])
        self._count = len(self._media)
        self.index = min(self.index, max(self._count - 1, 0))
        if enabled is not None:
            self.enabled = enabled
        return self

    def next(self) -> int:
        if self.enabled and self.index < self._count - 1:
            self.index += 1
        return self.index

    def previous(self) -> int:
        if self.enabled and self.index > 0:
            self.index -= 1
        return self.index

    def move_to(self, index: int) -> int:
        if self.enabled and self._count:
            self.index = max(0, min(int(index), self._count - 1))
        return self.index

    @property
    def has_next(self) -> bool:
        return self.enabled and self.index < self._count - 1

    @property
    def has_previous(self) -> bool:
        return self.enabled and self.index > 0

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "count": self._count,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
        }
