import math

import pytest
from unittest.mock import MagicMock

from spatial_engine.audio.components import AudioEmitter, AudioReceiver
from spatial_engine.audio.instances import (
    AudioTween,
    InstanceHandle,
    PlaybackState,
    SoundInstance,
)
from spatial_engine.audio.spatial import cleanup_stopped_instances, update_spatial_audio
from spatial_engine.components.transform import Transform


def make_emitter(store, x=10.0, y=0.0, z=0.0, range_=5.0, count=1):
    handles = [store.add(SoundInstance()) for _ in range(count)]
    return (Transform(x=x, y=y, z=z), AudioEmitter(range=range_, instances=handles))


# Update pass

def test_update_writes_every_instance(config, receiver, store):
    emitter = make_emitter(store, count=2)

    updated = update_spatial_audio(config, [receiver], [emitter], store)

    assert updated == 2
    for handle in emitter[1].instances:
        instance = store.get(handle)
        assert instance.volume == pytest.approx(8.0)
        assert instance.panning == pytest.approx(1.0)


def test_update_handles_each_emitter_separately(config, receiver, store):
    right = make_emitter(store, x=10.0)
    left = make_emitter(store, x=-20.0)

    update_spatial_audio(config, [receiver], [right, left], store)

    right_instance = store.get(right[1].instances[0])
    left_instance = store.get(left[1].instances[0])
    assert right_instance.panning == pytest.approx(1.0)
    assert left_instance.panning == pytest.approx(0.0, abs=1e-12)
    assert left_instance.volume == pytest.approx(4.0)


def test_update_disabled_without_config(receiver, spy_store):
    emitter = (Transform(x=1.0), AudioEmitter(range=1.0, instances=[InstanceHandle(1)]))

    assert update_spatial_audio(None, [receiver], [emitter], spy_store) == 0
    spy_store.get.assert_not_called()


@pytest.mark.parametrize("receiver_count", [0, 2, 3])
def test_update_needs_exactly_one_receiver(config, spy_store, receiver_count):
    receivers = [(Transform(), AudioReceiver()) for _ in range(receiver_count)]
    emitter = (Transform(x=1.0), AudioEmitter(range=1.0, instances=[InstanceHandle(1)]))

    assert update_spatial_audio(config, receivers, [emitter], spy_store) == 0
    assert spy_store.mock_calls == []


def test_update_uses_spy_store(config, receiver, spy_store):
    handle = InstanceHandle(7)
    emitter = (Transform(x=10.0), AudioEmitter(range=5.0, instances=[handle]))

    update_spatial_audio(config, [receiver], [emitter], spy_store)

    spy_store.get.assert_called_once_with(handle)
    instance = spy_store.get.return_value
    volume, tween = instance.set_volume.call_args.args
    assert volume == pytest.approx(8.0)
    assert tween == AudioTween()
    assert tween.instant
    panning, _ = instance.set_panning.call_args.args
    assert panning == pytest.approx(1.0)


def test_update_passes_custom_tween(config, receiver, spy_store):
    tween = AudioTween(duration=0.1)
    emitter = (Transform(x=10.0), AudioEmitter(range=5.0, instances=[InstanceHandle(1)]))

    update_spatial_audio(config, [receiver], [emitter], spy_store, tween=tween)

    instance = spy_store.get.return_value
    assert instance.set_volume.call_args.args[1] is tween


def test_update_skips_missing_instances(config, receiver, store):
    present = store.add(SoundInstance())
    emitter = (Transform(x=10.0), AudioEmitter(range=5.0, instances=[InstanceHandle(999), present]))

    assert update_spatial_audio(config, [receiver], [emitter], store) == 1
    assert store.get(present).volume == pytest.approx(8.0)
    assert emitter[1].instances == [InstanceHandle(999), present]


def test_update_with_empty_instance_list(config, receiver, store):
    emitter = (Transform(x=10.0), AudioEmitter(range=5.0))
    assert update_spatial_audio(config, [receiver], [emitter], store) == 0


def test_update_propagates_zero_distance_singularity(config, receiver, store):
    emitter = make_emitter(store, x=0.0)

    update_spatial_audio(config, [receiver], [emitter], store)

    instance = store.get(emitter[1].instances[0])
    assert math.isinf(instance.volume)
    assert math.isnan(instance.panning)


# Cleanup pass

def test_cleanup_removes_only_stopped(store):
    playing = store.add(SoundInstance())
    stopped_instance = SoundInstance()
    stopped_instance.stop()
    stopped = store.add(stopped_instance)
    paused_instance = SoundInstance()
    paused_instance.pause()
    paused = store.add(paused_instance)

    emitter = AudioEmitter(instances=[playing, stopped, paused])

    assert cleanup_stopped_instances([emitter], store) == 1
    assert emitter.instances == [playing, paused]


def test_cleanup_retains_unknown_handles(store):
    unknown = InstanceHandle(12345)
    emitter = AudioEmitter(instances=[unknown])

    assert cleanup_stopped_instances([emitter], store) == 0
    assert emitter.instances == [unknown]


def test_cleanup_keeps_order_and_list_identity(store):
    handles = [store.add(SoundInstance()) for _ in range(4)]
    store.get(handles[1]).stop()
    store.get(handles[3]).stop()

    emitter = AudioEmitter(instances=handles)
    original_list = emitter.instances

    cleanup_stopped_instances([emitter], store)

    assert emitter.instances is original_list
    assert emitter.instances == [handles[0], handles[2]]


def test_cleanup_does_not_touch_store(store):
    instance = SoundInstance()
    instance.stop()
    handle = store.add(instance)

    cleanup_stopped_instances([AudioEmitter(instances=[handle])], store)

    assert handle in store
    assert len(store) == 1


def test_cleanup_over_many_emitters(store):
    a = SoundInstance(length=1.0)
    b = SoundInstance()
    ha, hb = store.add(a), store.add(b)
    first = AudioEmitter(instances=[ha])
    second = AudioEmitter(instances=[hb])

    store.advance(2.0)

    assert cleanup_stopped_instances([first, second], store) == 1
    assert first.instances == []
    assert second.instances == [hb]


def test_cleanup_queries_state_through_store():
    spy = MagicMock()
    spy.get.return_value.state.return_value = PlaybackState.STOPPING
    emitter = AudioEmitter(instances=[InstanceHandle(1)])

    assert cleanup_stopped_instances([emitter], spy) == 0
    spy.get.return_value.state.assert_called_once_with()
