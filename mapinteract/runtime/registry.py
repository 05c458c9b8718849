"""Name-keyed interaction definition registry."""

from __future__ import annotations

from mapinteract.api.interactions import InteractionDefinition


class RuntimeInteractionRegistry:
    """Mapping from interaction name to definition."""

    def __init__(self) -> None:
        self._interactions: dict[str, InteractionDefinition] = {}

    def add(self, name: str, interaction: InteractionDefinition) -> InteractionDefinition | None:
        """Register or replace a definition. Returns the replaced one."""
        previous = self._interactions.get(name)
        self._interactions[name] = interaction
        return previous

    def remove(self, name: str) -> None:
        self._interactions.pop(name, None)

    def lookup(self, name: str | None) -> InteractionDefinition | None:
        if name is None:
            return None
        return self._interactions.get(name)

    def names(self) -> tuple[str, ...]:
        """Return registered names in registration order."""
        return tuple(self._interactions)

    def __contains__(self, name: object) -> bool:
        return name in self._interactions

    def __len__(self) -> int:
        return len(self._interactions)


InteractionRegistry = RuntimeInteractionRegistry
