"""
Positional audio.

Components:
- AudioEmitter, AudioReceiver

Model and passes:
- attenuate, lerp, AttenuationResult
- update_spatial_audio, cleanup_stopped_instances

Playback:
- SoundInstanceStore, SoundInstance, ChannelInstance, InstanceHandle
- PlaybackState, AudioTween, Easing

Systems:
- SpacialAudioSystem, InstanceCleanupSystem, add_spacial_audio
"""

from spatial_engine.audio.attenuation import AttenuationResult, attenuate, lerp
from spatial_engine.audio.components import AudioEmitter, AudioReceiver
from spatial_engine.audio.config import SpacialAudioConfig
from spatial_engine.audio.instances import (
    AudioTween,
    ChannelInstance,
    Easing,
    InstanceHandle,
    PlaybackHandle,
    PlaybackState,
    SoundInstance,
    SoundInstanceStore,
)
from spatial_engine.audio.spatial import cleanup_stopped_instances, update_spatial_audio
from spatial_engine.audio.system import (
    InstanceCleanupSystem,
    SpacialAudioSystem,
    add_spacial_audio,
)

__all__ = [
    "AttenuationResult",
    "attenuate",
    "lerp",
    "AudioEmitter",
    "AudioReceiver",
    "SpacialAudioConfig",
    "AudioTween",
    "ChannelInstance",
    "Easing",
    "InstanceHandle",
    "PlaybackHandle",
    "PlaybackState",
    "SoundInstance",
    "SoundInstanceStore",
    "cleanup_stopped_instances",
    "update_spatial_audio",
    "InstanceCleanupSystem",
    "SpacialAudioSystem",
    "add_spacial_audio",
]
