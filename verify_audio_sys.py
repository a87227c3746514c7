import sys
import os
import math

# Ensure we can import from root
sys.path.append(os.getcwd())

from spatial_engine import (
    AudioEmitter,
    AudioReceiver,
    PlaybackState,
    SoundInstance,
    SoundInstanceStore,
    SpacialAudioConfig,
    Transform,
    World,
    add_spacial_audio,
    attenuate,
    lerp,
)


def run_tests():
    print("=== Verifying Spatial Audio ===")

    # 1. Attenuation model
    print("[1] Testing attenuation...")
    assert lerp(2.0, 6.0, 0.0) == 2.0
    assert lerp(2.0, 6.0, 1.0) == 6.0
    result = attenuate(Transform(), AudioReceiver(), Transform(x=10.0), AudioEmitter(range=5.0))
    assert math.isclose(result.panning, 1.0)
    assert math.isclose(result.direct_volume, 8.0)
    print("    Attenuation OK")

    # 2. World integration
    print("[2] Testing systems...")
    store = SoundInstanceStore()
    world = World()
    audio, cleanup = add_spacial_audio(world, store, SpacialAudioConfig(max_distance=50.0))

    camera = world.create_entity("Camera")
    camera.add(Transform())
    camera.add(AudioReceiver())

    speaker = world.create_entity("Speaker")
    speaker.add(Transform(x=-10.0))
    handle = store.add(SoundInstance(length=0.5))
    speaker.add(AudioEmitter(range=5.0, instances=[handle]))

    world.update(1 / 60)
    instance = store.get(handle)
    assert math.isclose(instance.volume, 8.0)
    assert math.isclose(instance.panning, 0.0, abs_tol=1e-12)
    print("    Update OK")

    # 3. Cleanup
    print("[3] Testing cleanup...")
    store.advance(1.0)
    assert instance.state() is PlaybackState.STOPPED
    world.update(1 / 60)
    assert speaker.get(AudioEmitter).instances == []
    print("    Cleanup OK")

    print("\nALL TESTS PASSED")


if __name__ == "__main__":
    try:
        run_tests()
    except Exception as e:
        print(f"\nFAILED: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
