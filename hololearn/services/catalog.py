"""Built-in lesson catalog and model asset table."""

from hololearn.models.topics import Topic

MODEL_ASSETS: dict[str, str] = {
    "sun": "https://cdn.jsdelivr.net/gh/mrdoob/three.js@dev/examples/models/gltf/Planet.glb",
    "earth": "https://cdn.jsdelivr.net/gh/mrdoob/three.js@dev/examples/models/gltf/Earth.glb",
    "heart": "https://cdn.jsdelivr.net/gh/mrdoob/three.js@dev/examples/models/gltf/Heart.glb",
    "volcano": "https://cdn.jsdelivr.net/gh/mrdoob/three.js@dev/examples/models/gltf/Volcano.glb",
}

_ORIGIN = {"x": 0, "y": 0, "z": 0}

BUILTIN_TOPICS: list[dict] = [
    {
        "id": "solar-system",
        "name": "Solar System",
        "description": "Learn about our solar system and planetary motion",
        "responses": {
            "explain": {
                "narration": (
                    "This is our solar system. The Sun is at the center, and planets like "
                    "Earth orbit around it due to gravity. The Sun is a massive star that "
                    "provides light and heat to all the planets in our solar system."
                ),
                "actions": [
                    {"type": "load_model", "model": "sun", "position": _ORIGIN, "scale": 1.5},
                    {"type": "load_model", "model": "earth", "position": {"x": 3, "y": 0, "z": 0}, "scale": 0.7},
                    {
                        "type": "animate",
                        "animation": "orbit",
                        "target": "earth",
                        "center": _ORIGIN,
                        "speed": 0.01,
                        "radius": 3,
                    },
                ],
                "quiz": {
                    "question": "What keeps Earth in orbit around the Sun?",
                    "options": [
                        "Electromagnetic forces",
                        "Gravity",
                        "Solar wind",
                        "Centrifugal force",
                    ],
                    "correctAnswer": "Gravity",
                    "correctFeedback": (
                        "Correct! Gravity is the force that keeps Earth in orbit around the Sun."
                    ),
                    "incorrectFeedback": (
                        "Not quite. The correct answer is Gravity, which is the attractive "
                        "force between two masses."
                    ),
                },
            },
            "scale": {
                "narration": (
                    "The scale of our solar system is enormous. The Sun is much larger than "
                    "Earth - about 109 times wider. The distance between them is about 150 "
                    "million kilometers!"
                ),
                "actions": [
                    {"type": "load_model", "model": "sun", "position": _ORIGIN, "scale": 2},
                    {"type": "load_model", "model": "earth", "position": {"x": 5, "y": 0, "z": 0}, "scale": 0.2},
                    {
                        "type": "animate",
                        "animation": "orbit",
                        "target": "earth",
                        "center": _ORIGIN,
                        "speed": 0.005,
                        "radius": 5,
                    },
                ],
            },
        },
    },
    {
        "id": "heart-anatomy",
        "name": "Heart Anatomy",
        "description": "Explore the structure and function of the human heart",
        "responses": {
            "explain": {
                "narration": (
                    "This is a model of the human heart. It has four chambers: two atria on "
                    "top and two ventricles below. The heart pumps blood throughout the "
                    "body, delivering oxygen and nutrients to tissues."
                ),
                "actions": [
                    {"type": "load_model", "model": "heart", "position": _ORIGIN, "scale": 1.2},
                    {"type": "animate", "animation": "beat", "target": "heart", "speed": 0.1, "intensity": 0.1},
                ],
                "quiz": {
                    "question": "How many chambers does the human heart have?",
                    "options": ["2", "3", "4", "5"],
                    "correctAnswer": "4",
                    "correctFeedback": (
                        "That's right! The heart has four chambers: two atria and two ventricles."
                    ),
                    "incorrectFeedback": (
                        "Actually, the human heart has four chambers: two atria and two ventricles."
                    ),
                },
            },
            "function": {
                "narration": (
                    "The heart functions as a pump. The right side receives oxygen-poor "
                    "blood and sends it to the lungs. The left side receives oxygen-rich "
                    "blood from the lungs and pumps it to the body."
                ),
                "actions": [
                    {"type": "load_model", "model": "heart", "position": _ORIGIN, "scale": 1.2},
                    {"type": "animate", "animation": "beat", "target": "heart", "speed": 0.15, "intensity": 0.15},
                ],
            },
        },
    },
    {
        "id": "volcano",
        "name": "Volcano",
        "description": "Learn about volcanic structures and eruptions",
        "responses": {
            "explain": {
                "narration": (
                    "This is a volcano. It forms when magma from within the Earth erupts "
                    "through the crust. Volcanoes can be found on land and under the ocean, "
                    "and they play a key role in shaping Earth's surface."
                ),
                "actions": [
                    {"type": "load_model", "model": "volcano", "position": {"x": 0, "y": -1, "z": 0}, "scale": 1.5},
                ],
                "quiz": {
                    "question": "What is molten rock beneath the Earth's surface called?",
                    "options": ["Lava", "Magma", "Igneous", "Basalt"],
                    "correctAnswer": "Magma",
                    "correctFeedback": (
                        "Correct! Magma is molten rock below the surface, which becomes lava "
                        "when it erupts."
                    ),
                    "incorrectFeedback": (
                        "Not quite. The correct answer is Magma. Lava is what it's called "
                        "after it erupts."
                    ),
                },
            },
            "eruption": {
                "narration": (
                    "During a volcanic eruption, magma rises through the volcano's conduit "
                    "and is expelled as lava, ash, and gases. The type of eruption depends "
                    "on the magma's viscosity and gas content."
                ),
                "actions": [
                    {"type": "load_model", "model": "volcano", "position": {"x": 0, "y": -1, "z": 0}, "scale": 1.5},
                    {"type": "animate", "animation": "pulse", "target": "volcano", "speed": 0.2, "intensity": 0.05},
                ],
            },
        },
    },
]


def builtin_topics() -> list[Topic]:
    """Validate and return the built-in topics in catalog order."""
    return [Topic.model_validate(data) for data in BUILTIN_TOPICS]
