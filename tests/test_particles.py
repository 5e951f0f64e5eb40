import random

import pytest

from railengine.descriptors import DescriptorAllocator
from railengine.linalg import multiply
from railengine.particle_types import AccelerationField, Particle
from railengine.particles import DELTA_TIME, MAX_INSTANCES, ParticleManager
from railengine.structs import AABB, Matrix4x4, Transform, Vector3, Vector4


def _manager(**kwargs):
    return ParticleManager(rng=random.Random(7), **kwargs)


def _particle(translate, velocity, life=2.0, current=0.0):
    return Particle(
        transform=Transform(Vector3(1.0, 1.0, 1.0), Vector3(), translate),
        velocity=velocity,
        color=Vector4(0.2, 0.4, 0.6, 1.0),
        life_time=life,
        current_time=current,
    )


def test_groups_get_sequential_srv_indices():
    manager = _manager()
    first = manager.create_particle_group("a", "resources/a.png")
    second = manager.create_particle_group("b", "resources/b.png")
    assert first.srv_index == 0
    assert second.srv_index == 1
    assert second.material_data.texture_index == second.srv_index
    assert first.material_data.texture_file_path == "resources/a.png"


def test_duplicate_group_is_kept():
    manager = _manager()
    first = manager.create_particle_group("a", "x.png")
    again = manager.create_particle_group("a", "y.png")
    assert again is first
    assert manager.srv_allocator.used == 1
    assert first.material_data.texture_file_path == "x.png"


def test_instance_buffer_starts_as_identity():
    manager = _manager()
    group = manager.create_particle_group("a", "x.png")
    assert len(group.instance_data) == MAX_INSTANCES
    assert all(inst.world == Matrix4x4.identity() for inst in group.instance_data)
    assert all(inst.color == Vector4(1.0, 1.0, 1.0, 1.0) for inst in group.instance_data)


def test_allocator_exhaustion_raises():
    manager = _manager(srv_allocator=DescriptorAllocator(32, max_count=1))
    manager.create_particle_group("a", "x.png")
    with pytest.raises(RuntimeError):
        manager.create_particle_group("b", "y.png")


def test_emit_unknown_group_raises():
    with pytest.raises(KeyError):
        _manager().emit("missing", Vector3(), 1)


def test_emit_ranges():
    manager = _manager()
    group = manager.create_particle_group("a", "x.png")
    origin = Vector3(5.0, -3.0, 2.0)
    manager.emit("a", origin, 50)
    assert len(group.particles) == 50
    for p in group.particles:
        for value, centre in zip(p.transform.translate, origin):
            assert centre - 1.0 <= value <= centre + 1.0
        assert all(-1.0 <= v <= 1.0 for v in p.velocity)
        assert all(0.0 <= c <= 1.0 for c in (p.color.x, p.color.y, p.color.z))
        assert p.color.w == 1.0
        assert 1.0 <= p.life_time <= 3.0
        assert p.current_time == 0.0
        assert p.transform.scale == Vector3(1.0, 1.0, 1.0)


def test_emit_is_deterministic_for_a_seed():
    a = ParticleManager(rng=random.Random(3))
    b = ParticleManager(rng=random.Random(3))
    for m in (a, b):
        m.create_particle_group("g", "x.png")
        m.emit("g", Vector3(1.0, 2.0, 3.0), 4)
    assert a.particle_groups["g"].particles == b.particle_groups["g"].particles


def test_update_moves_and_ages():
    manager = _manager()
    group = manager.create_particle_group("a", "x.png")
    group.particles.append(_particle(Vector3(0.0, 0.0, 0.0), Vector3(6.0, 0.0, -6.0)))
    manager.update()
    p = group.particles[0]
    assert p.transform.translate.x == pytest.approx(6.0 * DELTA_TIME)
    assert p.transform.translate.z == pytest.approx(-6.0 * DELTA_TIME)
    assert p.current_time == pytest.approx(DELTA_TIME)
    assert group.instance_count == 1
    assert group.instance_data[0].color.w == pytest.approx(1.0 - DELTA_TIME / 2.0)
    assert group.instance_data[0].color.x == pytest.approx(0.2)
    assert manager.first_particle_position == p.transform.translate


def test_update_removes_expired():
    manager = _manager()
    group = manager.create_particle_group("a", "x.png")
    group.particles.append(_particle(Vector3(), Vector3(), life=1.0, current=1.0))
    group.particles.append(_particle(Vector3(), Vector3(), life=1.0, current=0.0))
    manager.update()
    assert len(group.particles) == 1
    assert group.instance_count == 1


def test_particles_beyond_limit_are_not_advanced():
    manager = _manager(max_instances=2)
    group = manager.create_particle_group("a", "x.png")
    for _ in range(3):
        group.particles.append(_particle(Vector3(), Vector3(1.0, 1.0, 1.0)))
    manager.update()
    assert group.instance_count == 2
    assert group.particles[2].current_time == 0.0
    assert group.particles[2].transform.translate == Vector3()


def test_wind_accelerates_inside_area():
    manager = _manager()
    manager.use_wind = True
    manager.acceleration_field = AccelerationField(
        Vector3(15.0, 0.0, 0.0), AABB(Vector3(-1.0, -1.0, -1.0), Vector3(1.0, 1.0, 1.0))
    )
    group = manager.create_particle_group("a", "x.png")
    group.particles.append(_particle(Vector3(), Vector3()))
    group.particles.append(_particle(Vector3(5.0, 5.0, 5.0), Vector3()))
    manager.update()
    assert group.particles[0].velocity.x == pytest.approx(15.0 * DELTA_TIME)
    assert group.particles[1].velocity == Vector3()


def test_billboard_world_has_no_translation():
    manager = _manager()
    group = manager.create_particle_group("a", "x.png")
    group.particles.append(_particle(Vector3(4.0, 5.0, 6.0), Vector3()))
    manager.update()
    inst = group.instance_data[0]
    assert inst.world.m[3][:3] == [0.0, 0.0, 0.0]
    assert inst.wvp == multiply(inst.world, manager.view_projection_matrix)


def test_without_billboard_world_uses_translation():
    manager = _manager()
    manager.use_billboard = False
    group = manager.create_particle_group("a", "x.png")
    group.particles.append(_particle(Vector3(4.0, 5.0, 6.0), Vector3()))
    manager.update()
    assert group.instance_data[0].world.m[3][:3] == [4.0, 5.0, 6.0]


def test_quad_model_has_six_vertices():
    manager = _manager()
    assert len(manager.model_data.vertices) == 6
    assert all(v.normal == Vector3(0.0, 0.0, 1.0) for v in manager.model_data.vertices)