import pytest

from spatial_engine.audio.components import AudioEmitter
from spatial_engine.components.transform import Transform
from spatial_engine.core.entity import Entity
from spatial_engine.core.system import System


class DriftSystem(System):
    """Moves emitters along +X."""
    required_components = [Transform, AudioEmitter]

    def process_entity(self, entity, dt):
        entity.get(Transform).move(10.0 * dt, 0.0)


class LateSystem(System):
    priority = -5

    def process_entity(self, entity, dt):
        pass


def test_system_processing(world):
    # Entity with required matching components
    e1 = Entity()
    e1.add(Transform())
    e1.add(AudioEmitter())
    world.add_entity(e1)

    # Entity missing one component
    e2 = Entity()
    e2.add(Transform())
    world.add_entity(e2)

    # Inactive entity is skipped
    e3 = Entity()
    e3.add(Transform())
    e3.add(AudioEmitter())
    e3.active = False
    world.add_entity(e3)

    world.add_system(DriftSystem())
    world.update(1.0)

    assert e1.get(Transform).x == 10.0
    assert e2.get(Transform).x == 0.0
    assert e3.get(Transform).x == 0.0


def test_disabled_system_does_nothing(world):
    e = world.create_entity()
    e.add(Transform())
    e.add(AudioEmitter())

    system = DriftSystem()
    system.enabled = False
    world.add_system(system)
    world.update(1.0)

    assert e.get(Transform).x == 0.0


def test_system_add_remove(world):
    system = DriftSystem()

    world.add_system(system)
    assert system.world is world
    assert world.get_system(DriftSystem) is system

    world.remove_system(system)
    assert world.get_system(DriftSystem) is None
    with pytest.raises(RuntimeError):
        _ = system.world


def test_unattached_system_has_no_entities():
    assert list(DriftSystem().get_entities()) == []


def test_system_priority_order(world):
    late = LateSystem()
    drift = DriftSystem()
    world.add_system(late)
    world.add_system(drift)

    assert world.systems == [drift, late]
    assert repr(drift) == "DriftSystem(requires=[Transform, AudioEmitter])"
