import pytest

from procaud.components import OneShotLifetime, Synth
from procaud.presets.arcane_attack import ArcaneAttack
from procaud.presets.blunt_impact import BluntImpact
from procaud.presets.ear_ringing import EarRinging, EarRingingParams
from procaud.presets.explosion import Explosion
from procaud.presets.heartbeat import Heartbeat, HeartbeatParams
from procaud.presets.lightning import LightningStrike, LightningZap
from procaud.presets.sword_slash import SwordSlash
from procaud.source import ProceduralAudio
from procaud.world import Entity, World, build_preset


@pytest.mark.parametrize(
    "preset, duration",
    [
        (SwordSlash(), 1.5),
        (BluntImpact(), 0.5),
        (LightningZap(), 0.7),
        (LightningStrike(), 3.0),
        (Explosion(), 3.0),
        (ArcaneAttack(), 1.0),
    ],
)
def test_one_shot_presets_get_lifetime(preset, duration):
    audio, lifetime = build_preset(preset)
    assert isinstance(audio, ProceduralAudio)
    assert lifetime.duration == duration
    assert lifetime.elapsed == 0.0


def test_build_preset_uses_stereo_at_44100():
    audio, _ = build_preset(SwordSlash())
    assert audio.sample_rate == 44100
    assert audio.channels == 2


def test_build_preset_rejects_non_preset():
    with pytest.raises(TypeError):
        build_preset(Synth())


def test_continuous_preset_returns_params():
    audio, params = build_preset(EarRinging(intensity=0.6))
    assert isinstance(params, EarRingingParams)
    assert params.intensity.value == pytest.approx(0.6)


def test_spawn_then_update_attaches_audio():
    world = World()
    entity = world.spawn(SwordSlash())
    assert world.get(entity, ProceduralAudio) is None
    world.update(0.0)
    assert isinstance(world.get(entity, ProceduralAudio), ProceduralAudio)
    assert world.get(entity, OneShotLifetime).duration == 1.5


def test_graph_built_only_once():
    world = World()
    entity = world.spawn(Heartbeat())
    world.update(0.0)
    first = world.get(entity, ProceduralAudio)
    world.update(0.1)
    assert world.get(entity, ProceduralAudio) is first


def test_reinsert_rebuilds():
    world = World()
    entity = world.spawn(EarRinging())
    world.update(0.0)
    first = world.get(entity, ProceduralAudio)
    world.insert(entity, EarRinging(intensity=0.9))
    world.update(0.0)
    assert world.get(entity, ProceduralAudio) is not first
    assert world.get(entity, EarRingingParams).intensity.value == pytest.approx(0.9)


def test_one_shot_despawns_after_lifetime():
    world = World()
    entity = world.spawn(BluntImpact())
    world.update(0.0)
    world.update(0.3)
    assert entity in world
    world.update(0.3)
    assert entity not in world
    assert len(world) == 0


def test_lifetime_not_ticked_in_build_frame():
    world = World()
    entity = world.spawn(BluntImpact())
    world.update(10.0)
    assert entity in world
    assert world.get(entity, OneShotLifetime).elapsed == 0.0


def test_heartbeat_changes_sync_with_clamping():
    world = World()
    entity = world.spawn(Heartbeat())
    world.update(0.0)
    hb = world.get(entity, Heartbeat)
    hb.heart_rate = 500.0
    hb.intensity = 0.25
    hb.arrhythmic_strength = -1.0
    world.update(0.0)
    params = world.get(entity, HeartbeatParams)
    assert params.rate.value == 220.0
    assert params.intensity.value == pytest.approx(0.25)
    assert params.arrhythmia.value == 0.0


def test_ear_ringing_sync():
    world = World()
    entity = world.spawn(EarRinging())
    world.update(0.0)
    world.get(entity, EarRinging).intensity = 0.75
    world.update(0.0)
    assert world.get(entity, EarRingingParams).intensity.value == pytest.approx(0.75)


def test_removing_params_removes_audio():
    world = World()
    entity = world.spawn(Heartbeat())
    world.update(0.0)
    removed = world.remove(entity, HeartbeatParams)
    assert isinstance(removed, HeartbeatParams)
    assert world.get(entity, ProceduralAudio) is not None
    world.update(0.0)
    assert world.get(entity, ProceduralAudio) is None
    assert world.get(entity, Heartbeat) is not None


def test_remove_missing_component_returns_none():
    world = World()
    entity = world.spawn()
    assert world.remove(entity, Heartbeat) is None


def test_non_preset_components_are_left_alone():
    world = World()
    entity = world.spawn(Synth())
    world.update(0.0)
    assert world.get(entity, ProceduralAudio) is None
    assert world.get(entity, Synth) == Synth()


def test_unknown_entity_raises():
    world = World()
    with pytest.raises(KeyError):
        world.get(Entity(99), Heartbeat)
    entity = world.spawn()
    world.despawn(entity)
    with pytest.raises(KeyError):
        world.despawn(entity)


def test_despawn_before_update_skips_build():
    world = World()
    entity = world.spawn(SwordSlash())
    world.despawn(entity)
    world.update(0.0)
    assert entity not in world
    assert len(world) == 0


def test_negative_dt_rejected():
    with pytest.raises(ValueError):
        World().update(-0.1)


def test_query_lists_matching_entities():
    world = World()
    a = world.spawn(Heartbeat())
    world.spawn(EarRinging())
    c = world.spawn(Heartbeat(heart_rate=90.0))
    found = [entity for entity, _ in world.query(Heartbeat)]
    assert found == [a, c]


def test_spawned_entities_are_distinct():
    world = World()
    entities = [world.spawn() for _ in range(5)]
    assert len(set(entities)) == 5
    assert list(world) == entities