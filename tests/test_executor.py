"""Tests for hololearn.services.executor."""

import asyncio

import pytest

from conftest import FakeLoader
from hololearn.models.topics import AnimateAction, AnimationKind, LoadModelAction, Vec3
from hololearn.services.catalog import MODEL_ASSETS
from hololearn.services.executor import ActionExecutor, animation_params
from hololearn.services.scene import HeadlessScene, OrbitState


class OrderRecordingScene(HeadlessScene):
    """Scene that logs when loads start and finish and when animations register."""

    def __init__(self, loader):
        super().__init__(MODEL_ASSETS, loader)
        self.events: list[str] = []

    async def load_model(self, key, position, scale):
        self.events.append(f"load_start:{key}")
        await asyncio.sleep(0.01)
        try:
            return await super().load_model(key, position, scale)
        finally:
            self.events.append(f"load_end:{key}")

    def register_animation(self, kind, target, params):
        self.events.append(f"animate:{target.key}")
        return super().register_animation(kind, target, params)


@pytest.fixture
def executor() -> ActionExecutor:
    return ActionExecutor()


def _orbit_earth(**params) -> AnimateAction:
    return AnimateAction(animation=AnimationKind.ORBIT, target="earth", **params)


class TestSequencing:
    async def test_load_completes_before_animation(self, executor: ActionExecutor) -> None:
        scene = OrderRecordingScene(FakeLoader())
        actions = [
            LoadModelAction(model="sun", scale=1.5),
            LoadModelAction(model="earth", position=Vec3(x=3), scale=0.7),
            _orbit_earth(speed=0.01, radius=3),
        ]

        outcomes = await executor.execute(actions, scene)

        assert scene.events == [
            "load_start:sun",
            "load_end:sun",
            "load_start:earth",
            "load_end:earth",
            "animate:earth",
        ]
        assert [o.ok for o in outcomes] == [True, True, True]
        assert [o.index for o in outcomes] == [0, 1, 2]

    async def test_failed_load_then_animation_fails_gracefully(self, executor: ActionExecutor) -> None:
        scene = OrderRecordingScene(FakeLoader(failing=(MODEL_ASSETS["sun"],)))
        actions = [
            LoadModelAction(model="sun"),
            AnimateAction(animation=AnimationKind.ORBIT, target="sun"),
        ]

        outcomes = await executor.execute(actions, scene)

        assert [o.ok for o in outcomes] == [False, False]
        assert outcomes[0].action_type == "load_model"
        assert outcomes[0].key == "sun"
        assert "sun" in outcomes[0].error
        assert outcomes[1].action_type == "animate"
        assert "No loaded model sun" in outcomes[1].error
        assert scene.events == ["load_start:sun", "load_end:sun"]
        assert scene.animations == []

    async def test_failure_does_not_stop_later_actions(self, executor: ActionExecutor, scene) -> None:
        actions = [
            LoadModelAction(model="comet"),
            LoadModelAction(model="heart", scale=1.2),
            AnimateAction(animation=AnimationKind.BEAT, target="heart"),
        ]

        outcomes = await executor.execute(actions, scene)

        assert [o.ok for o in outcomes] == [False, True, True]
        assert "comet" in outcomes[0].error
        assert scene.get_loaded_model("heart") is not None
        assert len(scene.animations) == 1

    async def test_empty_action_list(self, executor: ActionExecutor, scene) -> None:
        assert await executor.execute([], scene) == []

    async def test_load_uses_action_position_and_scale(self, executor: ActionExecutor, scene) -> None:
        await executor.execute([LoadModelAction(model="volcano", position=Vec3(y=-1), scale=1.5)], scene)
        handle = scene.get_loaded_model("volcano")
        assert handle.position == Vec3(y=-1)
        assert handle.scale == 1.5


class TestDefaults:
    def test_orbit_defaults(self) -> None:
        assert animation_params(_orbit_earth()) == {
            "center": Vec3(),
            "speed": 0.01,
            "radius": 3.0,
        }

    def test_beat_defaults(self) -> None:
        action = AnimateAction(animation=AnimationKind.BEAT, target="heart")
        assert animation_params(action) == {"speed": 0.1, "intensity": 0.1}

    def test_pulse_defaults(self) -> None:
        action = AnimateAction(animation=AnimationKind.PULSE, target="volcano")
        assert animation_params(action) == {"speed": 0.2, "intensity": 0.05}

    def test_explicit_values_win(self) -> None:
        action = _orbit_earth(center=Vec3(x=1), speed=0.005, radius=5)
        assert animation_params(action) == {"center": Vec3(x=1), "speed": 0.005, "radius": 5}

    def test_explicit_zero_is_kept(self) -> None:
        action = AnimateAction(animation=AnimationKind.BEAT, target="heart", speed=0.0)
        assert animation_params(action)["speed"] == 0.0

    def test_irrelevant_fields_are_ignored(self) -> None:
        action = AnimateAction(animation=AnimationKind.BEAT, target="heart", radius=9)
        assert "radius" not in animation_params(action)

    async def test_defaults_reach_the_scene(self, executor: ActionExecutor, scene) -> None:
        await executor.execute([LoadModelAction(model="earth"), _orbit_earth()], scene)
        state = scene.animations[0]
        assert isinstance(state, OrbitState)
        assert (state.speed, state.radius) == (0.01, 3.0)
        assert state.center == Vec3()
