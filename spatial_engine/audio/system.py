"""
Systems that run the spatial audio passes inside a World.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spatial_engine.audio.components import AudioEmitter, AudioReceiver
from spatial_engine.audio.config import SpacialAudioConfig
from spatial_engine.audio.instances import AudioTween, SoundInstanceStore
from spatial_engine.audio.spatial import cleanup_stopped_instances, update_spatial_audio
from spatial_engine.components.transform import Transform
from spatial_engine.core.entity import Entity
from spatial_engine.core.system import System

if TYPE_CHECKING:
    from spatial_engine.core.world import World


class SpacialAudioSystem(System):
    """
    Updates volume and panning of every emitter's instances.

    - Collects active AudioReceivers; runs only when exactly one exists.
    - Does nothing while config is None.
    """
    required_components = [AudioEmitter, Transform]

    def __init__(
        self,
        store: SoundInstanceStore,
        config: SpacialAudioConfig | None = None,
        tween: AudioTween | None = None,
    ):
        super().__init__()
        self.store = store
        self.config = config
        self.tween = tween
        self.last_updated: int = 0

    def _receivers(self) -> list[tuple[Transform, AudioReceiver]]:
        receivers = []
        for entity in self.world.get_entities_with(AudioReceiver, Transform):
            receiver = entity.get(AudioReceiver)
            if entity.active and receiver.active:
                receivers.append((entity.get(Transform), receiver))
        return receivers

    def update(self, dt: float) -> None:
        if not self.enabled or self._world is None:
            return

        emitters = [
            (entity.get(Transform), entity.get(AudioEmitter))
            for entity in self.get_entities()
            if entity.active
        ]
        self.last_updated = update_spatial_audio(
            self.config, self._receivers(), emitters, self.store, self.tween
        )

    def process_entity(self, entity: Entity, dt: float) -> None:
        """Unused; the pass needs every emitter at once."""


class InstanceCleanupSystem(System):
    """
    Drops handles of stopped instances from AudioEmitters.

    Runs after SpacialAudioSystem and, like it, only while config is set.
    """
    required_components = [AudioEmitter]
    priority = -10

    def __init__(self, store: SoundInstanceStore, config: SpacialAudioConfig | None = None):
        super().__init__()
        self.store = store
        self.config = config
        self.last_removed: int = 0

    def update(self, dt: float) -> None:
        self.last_removed = 0
        if self.config is None:
            return
        super().update(dt)

    def process_entity(self, entity: Entity, dt: float) -> None:
        self.last_removed += cleanup_stopped_instances([entity.get(AudioEmitter)], self.store)


def add_spacial_audio(
    world: World,
    store: SoundInstanceStore,
    config: SpacialAudioConfig | None = None,
) -> tuple[SpacialAudioSystem, InstanceCleanupSystem]:
    """
    Register both spatial audio systems on a world.

    Usage:
        store = SoundInstanceStore()
        audio, cleanup = add_spacial_audio(world, store, SpacialAudioConfig())
    """
    audio = SpacialAudioSystem(store, config)
    cleanup = InstanceCleanupSystem(store, config)
    world.add_system(audio)
    world.add_system(cleanup)
    return audio, cleanup
