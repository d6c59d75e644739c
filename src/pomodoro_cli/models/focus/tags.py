"""Tag selection for new sessions and tag filtering for statistics."""

from pomodoro_cli.repositories.repository import FocusRepository
from pomodoro_cli.utils.logger import get_logger

FALLBACK_TAG = "Work"


class TagSelection:
    """Ordered tag list with a cursor; the cursor picks the tag for new sessions."""

    def __init__(self, store: FocusRepository):
        self.store = store
        self.tags: list[str] = store.get_tags()
        self.index = 0

    def selected(self) -> str | None:
        if 0 <= self.index < len(self.tags):
            return self.tags[self.index]
        return None

    def next(self) -> None:
        if self.tags:
            self.index = (self.index + 1) % len(self.tags)

    def prev(self) -> None:
        if self.tags:
            self.index = (self.index - 1) % len(self.tags)

    def add(self, name: str) -> bool:
        """Add a tag. Returns False for blank or duplicate names."""
        name = name.strip()
        if not name or name in self.tags:
            return False
        try:
            self.store.add_tag(name)
        except Exception:
            get_logger("tags").warning("Could not save tag %r", name, exc_info=True)
        self.tags.append(name)
        return True

    def delete_selected(self) -> str | None:
        """Remove the selected tag and return its name."""
        name = self.selected()
        if name is None:
            return None
        try:
            self.store.delete_tag(name)
        except Exception:
            get_logger("tags").warning("Could not delete tag %r", name, exc_info=True)
        del self.tags[self.index]
        if self.index >= len(self.tags) and self.tags:
            self.index = len(self.tags) - 1
        return name


class StatsTagFilter:
    """Cycles through "all tags" (position 0) followed by each tag."""

    def __init__(self, tags: list[str]):
        self.tags = tags
        self.index = 0

    def next(self) -> None:
        self.index = (self.index + 1) % (len(self.tags) + 1)

    def prev(self) -> None:
        self.index = (self.index - 1) % (len(self.tags) + 1)

    def current(self) -> str | None:
        """The selected tag, or None for all tags."""
        if self.index == 0 or self.index > len(self.tags):
            return None
        return self.tags[self.index - 1]

    def label(self) -> str:
        return self.current() or "All Tags"
