"""Sequential execution of scene actions with per-action failure tolerance."""

from collections.abc import Sequence
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel

from hololearn.models.topics import (
    ORIGIN,
    AnimateAction,
    AnimationKind,
    LoadModelAction,
)
from hololearn.services.scene import SceneInterface

logger = structlog.get_logger()

# Applied only to parameters an action leaves unset.
ANIMATION_DEFAULTS: dict[AnimationKind, dict[str, Any]] = {
    AnimationKind.ORBIT: {"center": ORIGIN, "speed": 0.01, "radius": 3.0},
    AnimationKind.BEAT: {"speed": 0.1, "intensity": 0.1},
    AnimationKind.PULSE: {"speed": 0.2, "intensity": 0.05},
}


class AnimationTargetMissingError(Exception):
    """Raised when an animation targets a model that is not loaded."""

    pass


class ActionOutcome(BaseModel):
    """Result of executing a single scene action."""

    index: int
    action_type: str
    key: str
    ok: bool
    error: Optional[str] = None


def animation_params(action: AnimateAction) -> dict[str, Any]:
    """Merge an action's explicit parameters over the defaults for its kind."""
    params = dict(ANIMATION_DEFAULTS[action.animation])
    for name in params:
        value = getattr(action, name)
        if value is not None:
            params[name] = value
    return params


class ActionExecutor:
    """Runs a response's scene actions in order against a scene."""

    async def execute(
        self,
        actions: Sequence[Union[LoadModelAction, AnimateAction]],
        scene: SceneInterface,
    ) -> list[ActionOutcome]:
        """Execute actions one at a time, awaiting each before the next.

        A failing action is logged and recorded; the remaining actions still run.

        Args:
            actions: Ordered scene actions from a response template
            scene: Scene to mutate

        Returns:
            One outcome per action, in the same order
        """
        outcomes: list[ActionOutcome] = []

        for index, action in enumerate(actions):
            key = action.model if isinstance(action, LoadModelAction) else action.target
            try:
                await self._run(action, scene)
                outcomes.append(
                    ActionOutcome(index=index, action_type=action.type, key=key, ok=True)
                )
            except Exception as e:
                logger.warning(
                    "action_failed",
                    index=index,
                    action_type=action.type,
                    key=key,
                    animation=getattr(action, "animation", None),
                    error=str(e),
                )
                outcomes.append(
                    ActionOutcome(
                        index=index,
                        action_type=action.type,
                        key=key,
                        ok=False,
                        error=str(e),
                    )
                )

        logger.info(
            "actions_executed",
            total=len(outcomes),
            failed=sum(1 for outcome in outcomes if not outcome.ok),
        )
        return outcomes

    async def _run(
        self, action: Union[LoadModelAction, AnimateAction], scene: SceneInterface
    ) -> None:
        match action:
            case LoadModelAction():
                await scene.load_model(action.model, action.position, action.scale)
            case AnimateAction():
                target = scene.get_loaded_model(action.target)
                if target is None:
                    raise AnimationTargetMissingError(
                        f"No loaded model {action.target} to {action.animation.value}"
                    )
                scene.register_animation(action.animation, target, animation_params(action))
            case _:
                raise ValueError(f"Unsupported action type: {type(action).__name__}")
