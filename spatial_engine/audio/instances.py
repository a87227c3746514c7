"""
Sound instances and the keyed store that owns them.

The spatial passes only need three things from a playback handle:
set_volume, set_panning and a playback state. Two implementations are
provided:

- SoundInstance: an in-memory instance with tweened parameters, driven
  by advance(dt). Useful headless and in tests.
- ChannelInstance: wraps a pygame mixer channel.

Both live in a SoundInstanceStore under opaque InstanceHandles.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Protocol, runtime_checkable

import pygame


class PlaybackState(Enum):
    """Playback state of an instance."""
    PLAYING = auto()
    PAUSING = auto()
    PAUSED = auto()
    STOPPING = auto()
    STOPPED = auto()


class Easing(Enum):
    """Easing curves for AudioTween."""
    LINEAR = auto()
    IN_POWI = auto()
    OUT_POWI = auto()
    IN_OUT_POWI = auto()

    def apply(self, t: float, power: int = 2) -> float:
        """Map linear progress t in [0, 1] onto the curve."""
        if self is Easing.IN_POWI:
            return t ** power
        if self is Easing.OUT_POWI:
            return 1.0 - (1.0 - t) ** power
        if self is Easing.IN_OUT_POWI:
            if t < 0.5:
                return (2.0 * t) ** power / 2.0
            return 1.0 - (2.0 - 2.0 * t) ** power / 2.0
        return t


@dataclass(frozen=True)
class AudioTween:
    """
    Transition applied when a parameter changes.

    Attributes:
        duration: Seconds to reach the target; 0 is an instant step
        easing: Curve shape
        power: Exponent for the *_POWI curves
    """
    duration: float = 0.0
    easing: Easing = Easing.LINEAR
    power: int = 2

    @property
    def instant(self) -> bool:
        return self.duration <= 0.0


@dataclass(frozen=True, order=True)
class InstanceHandle:
    """Opaque, stable key of an instance inside a SoundInstanceStore."""
    id: int

    def __repr__(self) -> str:
        return f"InstanceHandle({self.id})"


@runtime_checkable
class PlaybackHandle(Protocol):
    """What the spatial passes require from a live instance."""

    def set_volume(self, volume: float, tween: AudioTween | None = None) -> None: ...

    def set_panning(self, panning: float, tween: AudioTween | None = None) -> None: ...

    def state(self) -> PlaybackState: ...


@dataclass
class _Tweener:
    """A single tweened parameter."""
    value: float
    start: float = 0.0
    target: float = 0.0
    elapsed: float = 0.0
    tween: AudioTween | None = None

    def set(self, target: float, tween: AudioTween | None) -> None:
        if tween is None or tween.instant:
            self.value = target
            self.tween = None
            return
        self.start = self.value
        self.target = target
        self.elapsed = 0.0
        self.tween = tween

    @property
    def busy(self) -> bool:
        return self.tween is not None

    def advance(self, dt: float) -> None:
        if self.tween is None:
            return
        self.elapsed += dt
        progress = min(self.elapsed / self.tween.duration, 1.0)
        eased = self.tween.easing.apply(progress, self.tween.power)
        self.value = self.start + (self.target - self.start) * eased
        if progress >= 1.0:
            self.value = self.target
            self.tween = None


class SoundInstance:
    """
    In-memory playback handle.

    Volume and panning follow the tween passed to their setters. Pause and
    stop fade the volume out over their tween, then settle in PAUSED or
    STOPPED. A non-looping instance with a known length stops by itself
    once its play head reaches the end.

    Args:
        volume: Initial volume
        panning: Initial panning (0 left, 0.5 center, 1 right)
        length: Length in seconds, None for endless
        loop: Restart at the end instead of stopping
    """

    def __init__(
        self,
        volume: float = 1.0,
        panning: float = 0.5,
        length: float | None = None,
        loop: bool = False,
    ):
        self._volume = _Tweener(volume)
        self._panning = _Tweener(panning)
        self._fade = _Tweener(1.0)
        self._state = PlaybackState.PLAYING
        self.length = length
        self.loop = loop
        self.position: float = 0.0

    @property
    def volume(self) -> float:
        return self._volume.value

    @property
    def panning(self) -> float:
        return self._panning.value

    @property
    def output_volume(self) -> float:
        """Volume including any pause/stop fade."""
        return self._volume.value * self._fade.value

    def state(self) -> PlaybackState:
        return self._state

    def set_volume(self, volume: float, tween: AudioTween | None = None) -> None:
        self._volume.set(volume, tween)

    def set_panning(self, panning: float, tween: AudioTween | None = None) -> None:
        self._panning.set(panning, tween)

    def pause(self, tween: AudioTween | None = None) -> None:
        if self._state in (PlaybackState.STOPPING, PlaybackState.STOPPED):
            return
        self._fade.set(0.0, tween)
        self._state = PlaybackState.PAUSED if not self._fade.busy else PlaybackState.PAUSING

    def resume(self, tween: AudioTween | None = None) -> None:
        if self._state not in (PlaybackState.PAUSING, PlaybackState.PAUSED):
            return
        self._fade.set(1.0, tween)
        self._state = PlaybackState.PLAYING

    def stop(self, tween: AudioTween | None = None) -> None:
        if self._state is PlaybackState.STOPPED:
            return
        self._fade.set(0.0, tween)
        self._state = PlaybackState.STOPPED if not self._fade.busy else PlaybackState.STOPPING

    def advance(self, dt: float) -> None:
        """Move tweens and the play head forward by dt seconds."""
        if self._state is PlaybackState.STOPPED:
            return

        self._volume.advance(dt)
        self._panning.advance(dt)
        self._fade.advance(dt)

        if self._state is PlaybackState.PAUSING and not self._fade.busy:
            self._state = PlaybackState.PAUSED
        elif self._state is PlaybackState.STOPPING and not self._fade.busy:
            self._state = PlaybackState.STOPPED
            return

        if self._state in (PlaybackState.PLAYING, PlaybackState.PAUSING):
            self.position += dt
            if self.length is not None and self.position >= self.length:
                if self.loop and self.length > 0.0:
                    self.position %= self.length
                else:
                    self.position = self.length
                    self._state = PlaybackState.STOPPED

    def __repr__(self) -> str:
        return (
            f"SoundInstance(volume={self.volume:.3f}, panning={self.panning:.3f}, "
            f"state={self._state.name})"
        )


class ChannelInstance:
    """
    Playback handle backed by a pygame mixer channel.

    pygame has no native panning, so volume and panning are folded into
    the channel's left/right gains with a linear balance law: centered
    plays both sides at full volume, hard right silences the left side.
    Volume and panning tweens are not supported by the mixer and are
    applied as a step; a tweened stop maps to Channel.fadeout and reports
    STOPPING until the channel goes idle.
    """

    def __init__(self, channel: pygame.mixer.Channel, volume: float = 1.0, panning: float = 0.5):
        self.channel = channel
        self._volume = volume
        self._panning = panning
        self._paused = False
        self._stopped = False
        self._apply()

    @classmethod
    def play(cls, sound: pygame.mixer.Sound, loops: int = 0) -> ChannelInstance | None:
        """
        Start sound on a free mixer channel.

        Returns:
            The new instance, or None if no channel could be found.
        """
        channel = pygame.mixer.find_channel()
        if not channel:
            channel = pygame.mixer.find_channel(True)
        if not channel:
            logging.warning("No free mixer channel for spatial instance")
            return None

        channel.play(sound, loops=loops)
        return cls(channel)

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def panning(self) -> float:
        return self._panning

    def gains(self) -> tuple[float, float]:
        """(left, right) channel gains for the current volume and panning."""
        pan = max(-1.0, min(1.0, self._panning * 2.0 - 1.0))
        left_pan = 1.0 if pan <= 0 else 1.0 - pan
        right_pan = 1.0 if pan >= 0 else 1.0 + pan
        volume = max(0.0, min(1.0, self._volume))
        return (left_pan * volume, right_pan * volume)

    def _apply(self) -> None:
        if not (math.isfinite(self._volume) and math.isfinite(self._panning)):
            logging.warning(
                f"Non-finite spatial parameters (volume={self._volume}, "
                f"panning={self._panning}); channel left unchanged"
            )
            return
        left, right = self.gains()
        self.channel.set_volume(left, right)

    def set_volume(self, volume: float, tween: AudioTween | None = None) -> None:
        self._volume = volume
        self._apply()

    def set_panning(self, panning: float, tween: AudioTween | None = None) -> None:
        self._panning = panning
        self._apply()

    def pause(self, tween: AudioTween | None = None) -> None:
        self.channel.pause()
        self._paused = True

    def resume(self, tween: AudioTween | None = None) -> None:
        self.channel.unpause()
        self._paused = False

    def stop(self, tween: AudioTween | None = None) -> None:
        """
        Stop playback, fading out over tween if given.

        A paused channel cannot fade, so it is stopped at once.
        """
        if tween is not None and not tween.instant and not self._paused:
            self.channel.fadeout(int(tween.duration * 1000))
        else:
            self.channel.stop()
        self._paused = False
        self._stopped = True

    def state(self) -> PlaybackState:
        if self._stopped:
            # Busy after stop() means a fadeout is still running
            if self.channel.get_busy():
                return PlaybackState.STOPPING
            return PlaybackState.STOPPED
        if self._paused:
            return PlaybackState.PAUSED
        if not self.channel.get_busy():
            return PlaybackState.STOPPED
        return PlaybackState.PLAYING


@dataclass
class SoundInstanceStore:
    """
    Keyed registry of live playback handles.

    Handles are never reused, so a handle that outlives its instance
    simply stops resolving.
    """
    _instances: dict[InstanceHandle, PlaybackHandle] = field(default_factory=dict)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    def add(self, instance: PlaybackHandle) -> InstanceHandle:
        """Register an instance and return its handle."""
        handle = InstanceHandle(next(self._ids))
        self._instances[handle] = instance
        return handle

    def get(self, handle: InstanceHandle) -> PlaybackHandle | None:
        """Resolve a handle, or None if it is not (or no longer) stored."""
        return self._instances.get(handle)

    # Instances are mutable in place; kept for parity with asset stores
    get_mut = get

    def remove(self, handle: InstanceHandle) -> PlaybackHandle | None:
        return self._instances.pop(handle, None)

    def handles(self) -> list[InstanceHandle]:
        return list(self._instances)

    def advance(self, dt: float) -> None:
        """Advance every instance that tracks its own time."""
        for instance in self._instances.values():
            advance = getattr(instance, "advance", None)
            if advance is not None:
                advance(dt)

    def __contains__(self, handle: object) -> bool:
        return handle in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[tuple[InstanceHandle, PlaybackHandle]]:
        return iter(list(self._instances.items()))
