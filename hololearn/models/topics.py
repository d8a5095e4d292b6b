"""Topic catalog models: topics, response templates, scene actions and quizzes."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Vec3(BaseModel):
    """A point or offset in scene space."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


ORIGIN = Vec3()


class AnimationKind(str, Enum):
    """Animations the scene knows how to run."""

    ORBIT = "orbit"
    BEAT = "beat"
    PULSE = "pulse"


class LoadModelAction(BaseModel):
    """Place a model from the asset table into the scene."""

    model_config = ConfigDict(frozen=True)

    type: Literal["load_model"] = "load_model"
    model: str = Field(description="Key into the model asset table")
    position: Vec3 = Field(default_factory=Vec3)
    scale: float = 1.0


class AnimateAction(BaseModel):
    """Attach an animation to a model loaded earlier in the same action list.

    Parameters left as None are filled in by the executor with the defaults
    for the animation kind.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["animate"] = "animate"
    animation: AnimationKind
    target: str = Field(description="Key of the model to animate")
    center: Optional[Vec3] = None
    speed: Optional[float] = None
    radius: Optional[float] = None
    intensity: Optional[float] = None


SceneAction = Annotated[
    Union[LoadModelAction, AnimateAction],
    Field(discriminator="type"),
]


class QuizSpec(BaseModel):
    """A multiple choice question attached to a response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str
    options: list[str]
    correct_answer: str = Field(alias="correctAnswer")
    correct_feedback: str = Field(alias="correctFeedback")
    incorrect_feedback: str = Field(alias="incorrectFeedback")

    @model_validator(mode="after")
    def check_options(self) -> "QuizSpec":
        if not self.options:
            raise ValueError("quiz must offer at least one option")
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"quiz options contain duplicates: {self.options}")
        if self.correct_answer not in self.options:
            raise ValueError(
                f"correct answer {self.correct_answer!r} is not one of the options"
            )
        return self


class ResponseTemplate(BaseModel):
    """Narration, scene actions and optional quiz for one topic and intent."""

    model_config = ConfigDict(frozen=True)

    narration: str
    actions: list[SceneAction] = Field(default_factory=list)
    quiz: Optional[QuizSpec] = None


class Topic(BaseModel):
    """A teachable subject with its named response templates."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    responses: dict[str, ResponseTemplate]


class TopicSummary(BaseModel):
    """Topic listing entry."""

    id: str
    name: str
    description: str


class TopicCatalog(BaseModel):
    """On-disk catalog format: {"topics": [...]}."""

    topics: list[Topic]


class ResponseBundle(BaseModel):
    """Resolved response for a single query."""

    model_config = ConfigDict(frozen=True)

    topic: str
    intent: str
    response: ResponseTemplate
