"""Headless scene state: loaded model handles and running animations.

The scene mirrors what the browser renders. It keeps one handle per model key
and a list of animation states that ``tick`` advances one frame at a time, so
the browser (or a test) can read positions and scales back out.
"""

import math
from typing import Annotated, Any, Literal, Optional, Protocol, Union

import structlog
from pydantic import BaseModel, Field

from hololearn.models.topics import AnimationKind, Vec3

logger = structlog.get_logger()

# Per-frame spin applied to orbiting models
ORBIT_SPIN = 0.01


class ModelNotAvailableError(Exception):
    """Raised when a model key is not in the asset table."""

    pass


class AssetLoadError(Exception):
    """Raised when a model asset cannot be fetched."""

    pass


class ModelHandle(BaseModel):
    """A model placed in the scene."""

    key: str
    url: str
    position: Vec3
    scale: float
    rotation_y: float = 0.0
    asset_size: int = 0


class OrbitState(BaseModel):
    """Circular motion around a center point in the XZ plane."""

    kind: Literal["orbit"] = "orbit"
    target: str
    center: Vec3
    speed: float
    radius: float
    angle: float = 0.0


class BeatState(BaseModel):
    """Rhythmic uniform scaling, used for both heartbeats and pulses."""

    kind: Literal["beat", "pulse"] = "beat"
    target: str
    speed: float
    intensity: float
    base_scale: float
    time: float = 0.0


AnimationState = Annotated[Union[OrbitState, BeatState], Field(discriminator="kind")]


def step_animation(state: Union[OrbitState, BeatState], model: ModelHandle) -> None:
    """Advance an animation by one frame, updating the model in place."""
    if isinstance(state, OrbitState):
        state.angle += state.speed
        model.position = Vec3(
            x=state.center.x + math.cos(state.angle) * state.radius,
            y=model.position.y,
            z=state.center.z + math.sin(state.angle) * state.radius,
        )
        model.rotation_y += ORBIT_SPIN
    else:
        state.time += state.speed
        model.scale = state.base_scale * (1 + math.sin(state.time) * state.intensity)


class SceneSnapshot(BaseModel):
    """Serializable view of the scene."""

    models: list[ModelHandle]
    animations: list[AnimationState]


class AssetFetcher(Protocol):
    async def fetch(self, url: str) -> bytes: ...


class SceneInterface(Protocol):
    """What the action executor needs from a scene."""

    async def load_model(self, key: str, position: Vec3, scale: float) -> ModelHandle: ...

    def get_loaded_model(self, key: str) -> Optional[ModelHandle]: ...

    def clear_all(self) -> None: ...

    def register_animation(
        self, kind: AnimationKind, target: ModelHandle, params: dict[str, Any]
    ) -> Union[OrbitState, BeatState]: ...


class HeadlessScene:
    """In-memory scene keyed by model name."""

    def __init__(self, available_models: dict[str, str], loader: AssetFetcher):
        self.available_models = dict(available_models)
        self.loader = loader
        self.models: dict[str, ModelHandle] = {}
        self.animations: list[Union[OrbitState, BeatState]] = []

    async def load_model(self, key: str, position: Vec3, scale: float) -> ModelHandle:
        """Load a model into the scene, reusing the cached handle if present.

        Raises:
            ModelNotAvailableError: If the key is not in the asset table
            AssetLoadError: If the asset cannot be fetched
        """
        if key in self.models:
            return self.models[key]

        url = self.available_models.get(key)
        if url is None:
            raise ModelNotAvailableError(f"Model {key} not available")

        try:
            data = await self.loader.fetch(url)
        except Exception as e:
            logger.error("model_load_failed", model=key, url=url, error=str(e))
            raise AssetLoadError(f"Failed to load model {key}: {e}") from e

        handle = ModelHandle(
            key=key,
            url=url,
            position=position,
            scale=scale,
            asset_size=len(data),
        )
        self.models[key] = handle
        logger.debug("model_loaded", model=key, size=len(data))
        return handle

    def get_loaded_model(self, key: str) -> Optional[ModelHandle]:
        return self.models.get(key)

    def clear_all(self) -> None:
        """Remove every model and animation."""
        logger.debug(
            "scene_cleared",
            models=len(self.models),
            animations=len(self.animations),
        )
        self.models = {}
        self.animations = []

    def register_animation(
        self, kind: AnimationKind, target: ModelHandle, params: dict[str, Any]
    ) -> Union[OrbitState, BeatState]:
        """Start an animation on a loaded model."""
        if kind == AnimationKind.ORBIT:
            state = OrbitState(
                target=target.key,
                center=params["center"],
                speed=params["speed"],
                radius=params["radius"],
            )
        else:
            state = BeatState(
                kind=AnimationKind(kind).value,
                target=target.key,
                speed=params["speed"],
                intensity=params["intensity"],
                base_scale=target.scale,
            )
        self.animations.append(state)
        return state

    def tick(self, frames: int = 1) -> None:
        """Advance all animations by the given number of frames."""
        for _ in range(frames):
            for state in self.animations:
                model = self.models.get(state.target)
                if model is not None:
                    step_animation(state, model)

    def snapshot(self) -> SceneSnapshot:
        return SceneSnapshot(
            models=[m.model_copy() for m in self.models.values()],
            animations=[a.model_copy() for a in self.animations],
        )
