"""
Connection rules decide whether two nodes may be joined by an edge.

Each rule is a small pydantic model tagged by ``kind`` so a level's rule tree can
be dumped to JSON, loaded back and inspected. ``evaluate`` is the only place that
interprets them.
"""
from typing import Annotated, Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter


class AllowAll(BaseModel):
    kind: Literal["allow_all"] = "allow_all"


class DifferentDegree(BaseModel):
    """Nodes with the same required degree cannot connect"""
    kind: Literal["different_degree"] = "different_degree"


class AdjacentDegree(BaseModel):
    """Required degrees must differ by exactly one, e.g. 1-2 or 2-3"""
    kind: Literal["adjacent_degree"] = "adjacent_degree"


class Hierarchical(BaseModel):
    """Lower degree nodes connect only to higher degree nodes"""
    kind: Literal["hierarchical"] = "hierarchical"


class ByTypeTable(BaseModel):
    kind: Literal["by_type_table"] = "by_type_table"
    table: Dict[str, List[str]]  # piece type -> piece types it may connect to


class SpecificDegreePairs(BaseModel):
    kind: Literal["specific_degree_pairs"] = "specific_degree_pairs"
    pairs: List[Tuple[int, int]]  # unordered


class AllOf(BaseModel):
    kind: Literal["all_of"] = "all_of"
    rules: List["Rule"]


class AnyOf(BaseModel):
    kind: Literal["any_of"] = "any_of"
    rules: List["Rule"]


Rule = Annotated[
    Union[AllowAll, DifferentDegree, AdjacentDegree, Hierarchical, ByTypeTable, SpecificDegreePairs, AllOf, AnyOf],
    Field(discriminator="kind"),
]

AllOf.model_rebuild()
AnyOf.model_rebuild()

rule_adapter = TypeAdapter(Rule)


def evaluate(rule: Rule, node_a, node_b) -> bool:
    """Return True if the rule allows an edge between node_a and node_b"""
    deg_a = node_a.required_degree
    deg_b = node_b.required_degree

    if isinstance(rule, AllowAll):
        return True
    if isinstance(rule, DifferentDegree):
        return deg_a != deg_b
    if isinstance(rule, AdjacentDegree):
        return abs(deg_a - deg_b) == 1
    if isinstance(rule, Hierarchical):
        return min(deg_a, deg_b) < max(deg_a, deg_b)
    if isinstance(rule, ByTypeTable):
        allowed_for_a = rule.table.get(node_a.type_key, [])
        allowed_for_b = rule.table.get(node_b.type_key, [])
        return node_b.type_key in allowed_for_a or node_a.type_key in allowed_for_b
    if isinstance(rule, SpecificDegreePairs):
        return any(
            (deg_a == first and deg_b == second) or (deg_a == second and deg_b == first)
            for first, second in rule.pairs
        )
    if isinstance(rule, AllOf):
        return all(evaluate(child, node_a, node_b) for child in rule.rules)
    if isinstance(rule, AnyOf):
        return any(evaluate(child, node_a, node_b) for child in rule.rules)

    raise TypeError(f"Unsupported connection rule: {rule!r}")


# builders, so level definitions read like the rule they describe
def allow_all() -> AllowAll:
    return AllowAll()


def different_degree() -> DifferentDegree:
    return DifferentDegree()


def adjacent_degree() -> AdjacentDegree:
    return AdjacentDegree()


def hierarchical() -> Hierarchical:
    return Hierarchical()


def by_type_table(table: Dict[str, List[str]]) -> ByTypeTable:
    return ByTypeTable(table=table)


def specific_degree_pairs(pairs) -> SpecificDegreePairs:
    return SpecificDegreePairs(pairs=[tuple(pair) for pair in pairs])


def and_(*rules) -> AllOf:
    return AllOf(rules=list(rules))


def or_(*rules) -> AnyOf:
    return AnyOf(rules=list(rules))
