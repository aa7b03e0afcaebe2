"""A small entity store that turns preset components into playing audio.

Spawning an entity with a preset component (``Heartbeat``, ``SwordSlash``,
...) makes the next :meth:`World.update` build its signal graph and attach a
:class:`~procaud.source.ProceduralAudio`.

- Continuous presets also get live parameter handles. Later changes to the
  preset's fields reach those handles on each update.
- One-shot presets get a :class:`~procaud.components.OneShotLifetime`. Their
  entity is despawned once that lifetime runs out.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from .components import OneShotLifetime
from .presets.arcane_attack import ArcaneAttack, build_arcane_attack_graph
from .presets.blunt_impact import BluntImpact, build_blunt_impact_graph
from .presets.ear_ringing import EarRinging, EarRingingParams, build_ear_ringing_graph
from .presets.explosion import Explosion, build_explosion_graph
from .presets.heartbeat import Heartbeat, HeartbeatParams, build_heartbeat_graph
from .presets.lightning import (
    LightningStrike,
    LightningZap,
    build_lightning_strike_graph,
    build_lightning_zap_graph,
)
from .presets.sword_slash import SwordSlash, build_sword_slash_graph
from .source import ProceduralAudio

SAMPLE_RATE = 44100
CHANNELS = 2

# One-shot presets: graph builder and how long the entity lives, in seconds.
_ONE_SHOTS: dict[type, tuple[Callable[[Any], Any], float]] = {
    ArcaneAttack: (build_arcane_attack_graph, 1.0),
    SwordSlash: (build_sword_slash_graph, 1.5),
    BluntImpact: (build_blunt_impact_graph, 0.5),
    LightningZap: (build_lightning_zap_graph, 0.7),
    LightningStrike: (build_lightning_strike_graph, 3.0),
    Explosion: (build_explosion_graph, 3.0),
}

# Continuous presets: builders return (graph, params).
_CONTINUOUS: dict[type, Callable[[Any], tuple[Any, Any]]] = {
    Heartbeat: build_heartbeat_graph,
    EarRinging: build_ear_ringing_graph,
}

_PARAM_KINDS = (HeartbeatParams, EarRingingParams)


@dataclass(frozen=True)
class Entity:
    """Identifier of an entity in a :class:`World`."""

    id: int


def build_preset(component: Any) -> tuple[Any, ...]:
    """Build the components a preset needs to play.

    Returns the audio source together with either a one-shot lifetime or the
    preset's live parameters.

    Raises ``TypeError`` for a component that is not a preset.
    """
    kind = type(component)
    if kind in _ONE_SHOTS:
        builder, duration = _ONE_SHOTS[kind]
        audio = ProceduralAudio(builder(component), SAMPLE_RATE, CHANNELS)
        return audio, OneShotLifetime(duration)
    if kind in _CONTINUOUS:
        graph, params = _CONTINUOUS[kind](component)
        return ProceduralAudio(graph, SAMPLE_RATE, CHANNELS), params
    raise TypeError(f"{kind.__name__} is not a sound preset")


class World:
    """Entities holding at most one component of each type."""

    def __init__(self) -> None:
        self._entities: dict[Entity, dict[type, Any]] = {}
        self._ids = itertools.count()
        self._added: list[tuple[Entity, type]] = []
        self._removed: list[tuple[Entity, type]] = []

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    def _components(self, entity: Entity) -> dict[type, Any]:
        try:
            return self._entities[entity]
        except KeyError:
            raise KeyError(f"no such entity: {entity}") from None

    def spawn(self, *args: Any) -> Entity:
        """Create an entity holding the given components."""
        entity = Entity(next(self._ids))
        self._entities[entity] = {}
        self.insert(entity, *args)
        return entity

    def insert(self, entity: Entity, *args: Any) -> None:
        """Add components to an entity, replacing any of the same type."""
        components = self._components(entity)
        for component in args:
            kind = type(component)
            components[kind] = component
            self._added.append((entity, kind))

    def remove(self, entity: Entity, kind: type) -> Any:
        """Take the component of type ``kind`` off an entity and return it, or None."""
        component = self._components(entity).pop(kind, None)
        if component is not None:
            self._removed.append((entity, kind))
        return component

    def despawn(self, entity: Entity) -> None:
        """Delete an entity and all its components."""
        self._components(entity)
        del self._entities[entity]

    def get(self, entity: Entity, kind: type) -> Any:
        """The entity's component of type ``kind``, or None if it has none."""
        return self._components(entity).get(kind)

    def query(self, kind: type) -> Iterator[tuple[Entity, Any]]:
        """Every live entity holding a component of type ``kind``, with that component."""
        for entity, components in list(self._entities.items()):
            if kind in components:
                yield entity, components[kind]

    def update(self, dt: float) -> None:
        """Advance the world by ``dt`` seconds.

        Runs lifetime ticking, parameter sync and cleanup on the state left by
        the previous update. Then it builds graphs for components added since.
        """
        if dt < 0:
            raise ValueError(f"time step cannot be negative, got {dt}")
        self._tick_lifetimes(dt)
        self._sync_params()
        self._cleanup_audio()
        self._build_added()

    def _tick_lifetimes(self, dt: float) -> None:
        for entity, lifetime in list(self.query(OneShotLifetime)):
            if lifetime.tick(dt):
                self.despawn(entity)

    def _sync_params(self) -> None:
        for entity, hb in self.query(Heartbeat):
            params = self.get(entity, HeartbeatParams)
            if params is not None:
                params.rate.set(hb.heart_rate)
                params.intensity.set(hb.intensity)
                params.arrhythmia.set(hb.arrhythmic_strength)
        for entity, er in self.query(EarRinging):
            params = self.get(entity, EarRingingParams)
            if params is not None:
                params.intensity.set(er.intensity)

    def _cleanup_audio(self) -> None:
        removed, self._removed = self._removed, []
        for entity, kind in removed:
            if kind in _PARAM_KINDS and entity in self._entities:
                self._entities[entity].pop(ProceduralAudio, None)

    def _build_added(self) -> None:
        added, self._added = self._added, []
        for entity, kind in dict.fromkeys(added):
            if kind not in _ONE_SHOTS and kind not in _CONTINUOUS:
                continue
            components = self._entities.get(entity)
            if components is None or kind not in components:
                continue
            built = build_preset(components[kind])
            for component in built:
                components[type(component)] = component