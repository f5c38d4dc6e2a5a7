"""
Static food reference tables used to classify foods with little history.
"""
from typing import Dict, FrozenSet

# Inflammatory potential, 0-1
INFLAMMATORY_FOODS: Dict[str, float] = {
    "dairy": 0.7,
    "wheat flour": 0.6,
    "sugar": 0.65,
    "processed food": 0.55,
    "fried food": 0.6,
    "alcohol": 0.5,
    "artificial sweetener": 0.45,
    "msg": 0.5,
    "tomato": 0.3,
    "potato": 0.25,
    "peanut": 0.35,
    "corn": 0.3,
}

ANTI_INFLAMMATORY_FOODS: FrozenSet[str] = frozenset({
    # Omega-3
    "salmon", "mackerel", "sardine",
    # Berries
    "blueberry", "strawberry", "cherry",
    # Greens
    "broccoli", "spinach", "kale",
    # Healthy fats
    "olive oil", "avocado",
    "green tea", "ginger", "garlic",
})

ANTI_INFLAMMATORY_SUGGESTION = "Eat anti-inflammatory foods (salmon, blueberries, broccoli, etc.)"


def _key(food: str) -> str:
    return " ".join(food.strip().lower().split())


def inflammatory_score(food: str) -> float:
    return INFLAMMATORY_FOODS.get(_key(food), 0.0)


def is_anti_inflammatory(food: str) -> bool:
    return _key(food) in ANTI_INFLAMMATORY_FOODS
