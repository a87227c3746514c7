"""
Attenuation model for positional audio.

Maps one receiver and one emitter (transform plus tunables) to the
volume and stereo panning that the emitter's instances should play at.

Volume:
    base   = 4 * range / distance
    direct = 4 * base * emitter_facing * receiver_facing

Each facing factor blends from 1 toward the alignment of a direction
vector with the receiver->emitter direction, remapped to [0, 1], by the
entity's self_occlusion.

Panning:
    (cos(angle between receiver right and receiver->emitter) + 1) / 2
    so 0 is full left, 0.5 centered, 1 full right.

Nothing is clamped. A receiver standing on the emitter gives an infinite
volume and NaN panning; callers decide what to do with that.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from spatial_engine.audio.components import AudioEmitter, AudioReceiver
from spatial_engine.components.transform import Transform


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation: a at t=0, b at t=1."""
    return a + (b - a) * t


def normalize_or_zero(v: np.ndarray) -> np.ndarray:
    """Unit vector along v, or the zero vector if v has no length."""
    length = np.linalg.norm(v)
    if length == 0.0 or not np.isfinite(length):
        return np.zeros_like(v, dtype=np.float64)
    return v / length


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """Unsigned angle in [0, pi] between a and b; NaN if either is zero."""
    with np.errstate(divide='ignore', invalid='ignore'):
        cosine = np.float64(np.dot(a, b)) / np.sqrt(np.dot(a, a) * np.dot(b, b))
        return float(np.arccos(np.clip(cosine, -1.0, 1.0)))


def facing_factor(direction: np.ndarray, sound_dir: np.ndarray, self_occlusion: float) -> float:
    """
    Directional dampening factor.

    Args:
        direction: Facing vector of the entity (emitter back, receiver forward)
        sound_dir: Normalized receiver->emitter direction
        self_occlusion: 0 gives exactly 1, 1 gives the raw remapped dot
    """
    alignment = float(np.dot(direction, sound_dir)) * 0.5 + 0.5
    return lerp(1.0, alignment, self_occlusion)


@dataclass(frozen=True)
class AttenuationResult:
    """
    Playback parameters for one emitter.

    Attributes:
        direct_volume: Volume written to instances
        ambient_volume: Secondary distance term, not applied to instances
        panning: 0 full left, 0.5 center, 1 full right
    """
    direct_volume: float
    ambient_volume: float
    panning: float


def attenuate(
    receiver_transform: Transform,
    receiver: AudioReceiver,
    emitter_transform: Transform,
    emitter: AudioEmitter,
) -> AttenuationResult:
    """Compute volume and panning of an emitter as heard by the receiver."""
    sound_path = emitter_transform.translation - receiver_transform.translation
    distance = np.float64(np.linalg.norm(sound_path))
    sound_dir = normalize_or_zero(sound_path)

    with np.errstate(divide='ignore', invalid='ignore'):
        volume = np.float64(4.0 * emitter.range) / distance

        direct_volume = (
            4.0 * volume
            * facing_factor(emitter_transform.back, sound_dir, emitter.self_occlusion)
            * facing_factor(receiver_transform.forward, sound_dir, receiver.self_occlusion)
        )

        ambient_volume = volume / distance

        right_ear_angle = angle_between(receiver_transform.right, sound_path)
        panning = (np.cos(right_ear_angle) + 1.0) / 2.0

    return AttenuationResult(
        direct_volume=float(direct_volume),
        ambient_volume=float(ambient_volume),
        panning=float(panning),
    )
