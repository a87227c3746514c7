"""
Per-tick spatial audio passes.

Both passes take explicit collections rather than discovering entities
themselves, so they can be driven by the ECS systems in
spatial_engine.audio.system or called directly by any host loop.

- update_spatial_audio: writes volume/panning into emitter instances
- cleanup_stopped_instances: drops stopped handles from emitters
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from spatial_engine.audio.attenuation import attenuate
from spatial_engine.audio.components import AudioEmitter, AudioReceiver
from spatial_engine.audio.config import SpacialAudioConfig
from spatial_engine.audio.instances import AudioTween, PlaybackState, SoundInstanceStore
from spatial_engine.components.transform import Transform


def update_spatial_audio(
    config: SpacialAudioConfig | None,
    receivers: Sequence[tuple[Transform, AudioReceiver]],
    emitters: Iterable[tuple[Transform, AudioEmitter]],
    store: SoundInstanceStore,
    tween: AudioTween | None = None,
) -> int:
    """
    Apply attenuation for one tick.

    Args:
        config: Spatial audio settings; None disables the pass
        receivers: Candidate receivers; the pass only runs with exactly one
        emitters: Emitters with their world transforms
        store: Live instances, looked up by the emitters' handles
        tween: Transition for parameter changes, instant by default

    Returns:
        Number of instances updated
    """
    if config is None:
        return 0

    if len(receivers) != 1:
        logging.debug(f"Spatial audio skipped: {len(receivers)} receivers, expected 1")
        return 0

    if tween is None:
        tween = AudioTween()

    receiver_transform, receiver = receivers[0]
    updated = 0

    for emitter_transform, emitter in emitters:
        result = attenuate(receiver_transform, receiver, emitter_transform, emitter)

        for handle in emitter.instances:
            instance = store.get(handle)
            if instance is None:
                continue
            instance.set_volume(result.direct_volume, tween)
            instance.set_panning(result.panning, tween)
            updated += 1

    return updated


def cleanup_stopped_instances(
    emitters: Iterable[AudioEmitter],
    store: SoundInstanceStore,
) -> int:
    """
    Remove handles of stopped instances from each emitter.

    Handles the store cannot resolve are kept. The store itself is not
    modified.

    Returns:
        Number of handles removed
    """
    removed = 0

    for emitter in emitters:
        kept = []
        for handle in emitter.instances:
            instance = store.get(handle)
            if instance is not None and instance.state() is PlaybackState.STOPPED:
                continue
            kept.append(handle)

        pruned = len(emitter.instances) - len(kept)
        if pruned:
            emitter.instances[:] = kept
            removed += pruned

    if removed:
        logging.debug(f"Pruned {removed} stopped spatial instance(s)")

    return removed
