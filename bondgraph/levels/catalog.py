from typing import List

from bondgraph.engine import rules
from bondgraph.engine.errors import UnknownLevel
from bondgraph.engine.solvability import every_node_has_same_type_neighbor
from bondgraph.levels.instructions import LEVEL1_INSTRUCTIONS, LEVEL2_INSTRUCTIONS, LEVEL3_INSTRUCTIONS
from bondgraph.schemas.level_schema import LevelDefinition, PieceType


LEVEL1 = LevelDefinition(
    key="Level1",
    title="Villages",
    piece_types=[
        PieceType(key="piece1", required_degree=1, available_count=2, scale=0.06, label="Inn"),
        PieceType(key="piece2", required_degree=2, available_count=4, scale=0.06, label="Hamlet"),
        PieceType(key="piece3", required_degree=3, available_count=6, scale=0.06, label="Village"),
        PieceType(key="piece4", required_degree=4, available_count=2, scale=0.06, label="Town"),
    ],
    rule=rules.allow_all(),
    instructions=LEVEL1_INSTRUCTIONS,
)

# total degree (2*4) + (3*4) + (4*6) + (5*4) = 64, even
LEVEL2 = LevelDefinition(
    key="Level2",
    title="Transport",
    piece_types=[
        PieceType(key="L2piece1", required_degree=2, available_count=4, scale=0.08, label="Light rail"),
        PieceType(key="L2piece2", required_degree=3, available_count=4, scale=0.04, label="Bus"),
        PieceType(key="L2piece3", required_degree=4, available_count=6, scale=0.08, label="Train"),
        PieceType(key="L2piece4", required_degree=5, available_count=4, scale=0.12, label="Metro"),
    ],
    rule=rules.allow_all(),
    extra_predicate=every_node_has_same_type_neighbor,
    instructions=LEVEL2_INSTRUCTIONS,
)

LEVEL3 = LevelDefinition(
    key="Level3",
    title="Chemistry",
    piece_types=[
        PieceType(key="L3carbon", required_degree=4, available_count=1, scale=0.06, label="Carbon"),
        PieceType(key="L3oxygen", required_degree=2, available_count=1, scale=0.06, label="Oxygen"),
        PieceType(key="L3hydrogen", required_degree=1, available_count=4, scale=0.06, label="Hydrogen"),
    ],
    rule=rules.and_(
        rules.by_type_table({
            "L3carbon": ["L3hydrogen", "L3oxygen"],
            "L3oxygen": ["L3carbon", "L3hydrogen"],
            "L3hydrogen": ["L3carbon", "L3oxygen"],
        }),
        rules.hierarchical(),
    ),
    instructions=LEVEL3_INSTRUCTIONS,
)

LEVELS = {level.key: level for level in (LEVEL1, LEVEL2, LEVEL3)}


def list_levels() -> List[LevelDefinition]:
    return list(LEVELS.values())


def get_level(level_key: str) -> LevelDefinition:
    level = LEVELS.get(level_key)
    if level is None:
        raise UnknownLevel(level_key)
    return level
