from __future__ import annotations

from pydantic import Field

from spatial_engine.audio.instances import InstanceHandle
from spatial_engine.core.component import Component


class AudioEmitter(Component):
    """
    Attach to entities that emit positional sound.

    Instances listed here get their volume and panning rewritten every
    tick from the emitter and receiver transforms.

    Attributes:
        self_occlusion: Direct attenuation. Sounds facing away from the
            receiver are dampened; 0 disables, 1 applies fully.
        range: Distance at which the emitter sounds balanced.
        instances: Handles of instances played by this emitter. The same
            instance should only be on one emitter.
    """
    self_occlusion: float = 0.0
    range: float = 0.0
    instances: list[InstanceHandle] = Field(default_factory=list)


class AudioReceiver(Component):
    """
    Attach to the camera or player to define the 'ears' of the scene.

    The position and view direction come from the entity's Transform.
    Exactly one active AudioReceiver must exist for spatial audio to run.

    Attributes:
        self_occlusion: Dampening of sounds behind the receiver.
        active: Inactive receivers are ignored.
    """
    self_occlusion: float = 0.0
    active: bool = True
