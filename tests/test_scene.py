"""Tests for hololearn.services.scene."""

import math

import pytest

from conftest import FakeLoader
from hololearn.models.topics import AnimationKind, Vec3
from hololearn.services.catalog import MODEL_ASSETS
from hololearn.services.scene import (
    AssetLoadError,
    BeatState,
    HeadlessScene,
    ModelNotAvailableError,
    OrbitState,
)


class TestLoadModel:
    async def test_loads_and_registers(self, scene: HeadlessScene, loader: FakeLoader) -> None:
        handle = await scene.load_model("sun", Vec3(x=1), 1.5)
        assert handle.key == "sun"
        assert handle.url == MODEL_ASSETS["sun"]
        assert handle.position == Vec3(x=1)
        assert handle.scale == 1.5
        assert handle.asset_size == len(b"glTF-binary")
        assert scene.get_loaded_model("sun") is handle
        assert loader.calls == [MODEL_ASSETS["sun"]]

    async def test_cached_model_is_reused(self, scene: HeadlessScene, loader: FakeLoader) -> None:
        first = await scene.load_model("sun", Vec3(), 1.5)
        second = await scene.load_model("sun", Vec3(x=9), 2.0)
        assert second is first
        assert second.scale == 1.5
        assert len(loader.calls) == 1

    async def test_unknown_model_raises(self, scene: HeadlessScene) -> None:
        with pytest.raises(ModelNotAvailableError, match="comet"):
            await scene.load_model("comet", Vec3(), 1.0)
        assert scene.get_loaded_model("comet") is None

    async def test_fetch_failure_raises_asset_load_error(self) -> None:
        scene = HeadlessScene(MODEL_ASSETS, FakeLoader(failing=(MODEL_ASSETS["heart"],)))
        with pytest.raises(AssetLoadError):
            await scene.load_model("heart", Vec3(), 1.2)
        assert scene.get_loaded_model("heart") is None


class TestClearAll:
    async def test_drops_models_and_animations(self, scene: HeadlessScene, loader: FakeLoader) -> None:
        heart = await scene.load_model("heart", Vec3(), 1.2)
        scene.register_animation(AnimationKind.BEAT, heart, {"speed": 0.1, "intensity": 0.1})

        scene.clear_all()

        assert scene.models == {}
        assert scene.animations == []
        await scene.load_model("heart", Vec3(), 1.2)
        assert len(loader.calls) == 2


class TestAnimations:
    async def test_orbit_moves_around_center(self, scene: HeadlessScene) -> None:
        earth = await scene.load_model("earth", Vec3(x=3), 0.7)
        state = scene.register_animation(
            AnimationKind.ORBIT, earth, {"center": Vec3(), "speed": math.pi / 2, "radius": 2.0}
        )
        assert isinstance(state, OrbitState)

        scene.tick()

        assert earth.position.x == pytest.approx(0.0, abs=1e-9)
        assert earth.position.z == pytest.approx(2.0)
        assert earth.rotation_y == pytest.approx(0.01)

    async def test_beat_scales_from_base(self, scene: HeadlessScene) -> None:
        heart = await scene.load_model("heart", Vec3(), 1.5)
        state = scene.register_animation(
            AnimationKind.BEAT, heart, {"speed": math.pi / 2, "intensity": 0.1}
        )
        assert isinstance(state, BeatState)

        scene.tick()

        assert heart.scale == pytest.approx(1.5 * 1.1)

    async def test_pulse_keeps_its_kind(self, scene: HeadlessScene) -> None:
        volcano = await scene.load_model("volcano", Vec3(y=-1), 1.5)
        state = scene.register_animation(
            AnimationKind.PULSE, volcano, {"speed": 0.2, "intensity": 0.05}
        )
        assert state.kind == "pulse"
        scene.tick(frames=3)
        assert state.time == pytest.approx(0.6)

    async def test_tick_skips_cleared_targets(self, scene: HeadlessScene) -> None:
        heart = await scene.load_model("heart", Vec3(), 1.0)
        scene.register_animation(AnimationKind.BEAT, heart, {"speed": 0.1, "intensity": 0.1})
        del scene.models["heart"]
        scene.tick()


class TestSnapshot:
    async def test_snapshot_serializes(self, scene: HeadlessScene) -> None:
        earth = await scene.load_model("earth", Vec3(x=3), 0.7)
        scene.register_animation(
            AnimationKind.ORBIT, earth, {"center": Vec3(), "speed": 0.01, "radius": 3.0}
        )

        data = scene.snapshot().model_dump()

        assert data["models"][0]["key"] == "earth"
        assert data["animations"][0]["kind"] == "orbit"
        assert data["animations"][0]["target"] == "earth"

    async def test_snapshot_is_a_copy(self, scene: HeadlessScene) -> None:
        earth = await scene.load_model("earth", Vec3(x=3), 0.7)
        snapshot = scene.snapshot()
        earth.scale = 5.0
        assert snapshot.models[0].scale == 0.7
