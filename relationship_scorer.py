"""
relationship_scorer.py - Companion / antagonist / spacing analysis of a layout.

Algorithm details:
- Only 4-directionally adjacent cells (Manhattan distance 1) are related
- One grid cell is 12 inches; a pair closer than the mean of both plants'
  spacing gets a 'spacing' relationship
- Companions and antagonists are checked in each direction separately, so a
  pair that lists each other emits two relationships
- Harmony score: 70 base, +10 per companion, -15 per antagonist,
  -8 per spacing warning, clamped to 0-100 (100 with fewer than 2 plants)

Placed plants whose plant id is not in the catalog are skipped.
"""

from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Sequence

from models import PlacedPlant, Relationship
from plant_catalog import PLANTS


INCHES_PER_CELL = 12

BASE_SCORE = 70
COMPANION_BONUS = 10
ANTAGONIST_PENALTY = 15
SPACING_PENALTY = 8


@dataclass
class LayoutAnalysis:
    """Relationships of the current layout and the counters behind the score."""
    relationships: List[Relationship] = field(default_factory=list)
    score: int = 100
    companion_count: int = 0
    antagonist_count: int = 0
    spacing_warnings: int = 0

    def to_dict(self):
        return {
            'relationships': [r.to_dict() for r in self.relationships],
            'score': self.score,
            'companionCount': self.companion_count,
            'antagonistCount': self.antagonist_count,
            'spacingWarnings': self.spacing_warnings,
        }


def manhattan_distance(a: PlacedPlant, b: PlacedPlant) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def analyze_layout(placed: Sequence[PlacedPlant], catalog=None) -> LayoutAnalysis:
    """
    Compute every adjacency relationship and the harmony score in one pass.

    Args:
        placed: Placed plants of the garden.
        catalog: Mapping of plant id -> Plant (defaults to the built-in catalog).

    Returns:
        LayoutAnalysis with relationships in pair order and the clamped score.
    """
    catalog = PLANTS if catalog is None else catalog
    analysis = LayoutAnalysis()

    for a, b in combinations(placed, 2):
        plant_a = catalog.get(a.plant_id)
        plant_b = catalog.get(b.plant_id)
        if plant_a is None or plant_b is None:
            continue

        distance = manhattan_distance(a, b)
        if distance != 1:
            continue

        min_distance = (plant_a.spacing + plant_b.spacing) / 2
        if distance * INCHES_PER_CELL < min_distance:
            analysis.relationships.append(Relationship('spacing', a.x, a.y, b.x, b.y))
            analysis.spacing_warnings += 1

        # Directional checks: the declaring plant is the "from" end
        if plant_b.id in plant_a.companions:
            analysis.relationships.append(Relationship('companion', a.x, a.y, b.x, b.y))
            analysis.companion_count += 1
        if plant_a.id in plant_b.companions:
            analysis.relationships.append(Relationship('companion', b.x, b.y, a.x, a.y))
            analysis.companion_count += 1

        if plant_b.id in plant_a.antagonists:
            analysis.relationships.append(Relationship('antagonist', a.x, a.y, b.x, b.y))
            analysis.antagonist_count += 1
        if plant_a.id in plant_b.antagonists:
            analysis.relationships.append(Relationship('antagonist', b.x, b.y, a.x, a.y))
            analysis.antagonist_count += 1

    if len(placed) < 2:
        analysis.score = 100
    else:
        analysis.score = compute_harmony_score(
            analysis.companion_count,
            analysis.antagonist_count,
            analysis.spacing_warnings,
        )
    return analysis


def compute_harmony_score(companion_count: int, antagonist_count: int, spacing_warnings: int) -> int:
    """Clamp the weighted counters into the 0-100 harmony range."""
    raw = (BASE_SCORE
           + COMPANION_BONUS * companion_count
           - ANTAGONIST_PENALTY * antagonist_count
           - SPACING_PENALTY * spacing_warnings)
    return max(0, min(100, raw))


def compute_relationships(placed: Sequence[PlacedPlant], catalog=None) -> List[Relationship]:
    """Relationships only (see analyze_layout)."""
    return analyze_layout(placed, catalog).relationships


def get_harmony_score(placed: Sequence[PlacedPlant], catalog=None) -> int:
    """Harmony score only (see analyze_layout)."""
    return analyze_layout(placed, catalog).score
