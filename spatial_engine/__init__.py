"""
Spatial Engine

Positional audio for 3D scenes: per-tick volume and stereo panning of
sound instances, computed from receiver and emitter transforms.

Quick Start:
    from spatial_engine import (
        World, Transform, AudioEmitter, AudioReceiver,
        SoundInstance, SoundInstanceStore, SpacialAudioConfig,
        add_spacial_audio,
    )

    store = SoundInstanceStore()
    world = World()
    add_spacial_audio(world, store, SpacialAudioConfig(max_distance=50.0))

    camera = world.create_entity("Camera")
    camera.add(Transform())
    camera.add(AudioReceiver(self_occlusion=0.3))

    speaker = world.create_entity("Speaker")
    speaker.add(Transform(x=10.0))
    speaker.add(AudioEmitter(range=5.0, instances=[store.add(SoundInstance())]))

    world.update(1 / 60)
"""

__version__ = "0.1.0"

from spatial_engine.core import Component, Entity, System, World
from spatial_engine.components import Transform
from spatial_engine.audio import (
    AttenuationResult,
    AudioEmitter,
    AudioReceiver,
    AudioTween,
    ChannelInstance,
    Easing,
    InstanceCleanupSystem,
    InstanceHandle,
    PlaybackState,
    SoundInstance,
    SoundInstanceStore,
    SpacialAudioConfig,
    SpacialAudioSystem,
    add_spacial_audio,
    attenuate,
    cleanup_stopped_instances,
    lerp,
    update_spatial_audio,
)

__all__ = [
    # ECS
    "Component",
    "Entity",
    "System",
    "World",
    "Transform",
    # Audio
    "AttenuationResult",
    "AudioEmitter",
    "AudioReceiver",
    "AudioTween",
    "ChannelInstance",
    "Easing",
    "InstanceCleanupSystem",
    "InstanceHandle",
    "PlaybackState",
    "SoundInstance",
    "SoundInstanceStore",
    "SpacialAudioConfig",
    "SpacialAudioSystem",
    "add_spacial_audio",
    "attenuate",
    "cleanup_stopped_instances",
    "lerp",
    "update_spatial_audio",
]
