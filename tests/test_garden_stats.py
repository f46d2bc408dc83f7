"""
tests/test_garden_stats.py - Layout counts, diversity, density and preset templates.
"""

import pytest

from garden_stats import get_garden_stats, calculate_diversity, calculate_density
from garden_templates import GARDEN_TEMPLATES, get_template, build_template_plants
from models import PlacedPlant
from plant_catalog import PLANTS


def placed(plant_id, x, y=0):
    return PlacedPlant(id=f"{plant_id}-{x}-{y}", plant_id=plant_id, x=x, y=y)


class TestStats:
    def test_counts(self):
        stats = get_garden_stats([placed('tomato', 0), placed('tomato', 1), placed('basil', 2), placed('marigold', 3)])

        assert stats['totalPlants'] == 4
        assert stats['uniqueCount'] == 3
        assert stats['plantCounts'] == {'Tomato': 2, 'Basil': 1, 'Marigold': 1}
        assert stats['categories'] == {'vegetable': 2, 'herb': 1, 'fruit': 0, 'flower': 1}
        assert stats['families']['Nightshades (Solanaceae)'] == 2
        assert stats['totalSpacing'] == 2 * PLANTS['tomato'].spacing + PLANTS['basil'].spacing + PLANTS['marigold'].spacing

    def test_unknown_plants_are_not_counted_by_name(self):
        stats = get_garden_stats([placed('triffid', 0)])
        assert stats['totalPlants'] == 1
        assert stats['uniqueCount'] == 0


class TestDiversity:
    def test_empty(self):
        assert calculate_diversity([])['score'] == 0

    def test_single_crop(self):
        result = calculate_diversity([placed('tomato', 0), placed('tomato', 1)])
        assert result == {'score': 40, 'uniqueRatio': 0.5, 'familyCount': 1}

    def test_score_is_capped(self):
        mix = ['tomato', 'beans', 'carrot', 'onion', 'cabbage', 'corn', 'basil']
        result = calculate_diversity([placed(pid, x) for x, pid in enumerate(mix)])
        assert result['familyCount'] == 7
        assert result['score'] == 100


class TestDensity:
    @pytest.mark.parametrize('count, score', [(0, 60), (5, 90), (10, 70), (13, 40)])
    def test_bands(self, count, score):
        plants = [placed('lettuce', i % 4, i // 4) for i in range(count)]
        assert calculate_density(plants, 4)['score'] == score


class TestTemplates:
    def test_templates_fit_the_smallest_grid(self):
        for template in GARDEN_TEMPLATES.values():
            cells = [(c['x'], c['y']) for c in template['plants']]
            assert len(cells) == len(set(cells))
            assert all(0 <= x < 4 and 0 <= y < 4 for x, y in cells)
            assert all(c['plant_id'] in PLANTS for c in template['plants'])

    def test_build_plants(self):
        plants = build_template_plants(get_template('salad'), '2026-04-01T08:00:00')
        assert len(plants) == 8
        assert plants[0].id == 'lettuce-0-0'
        assert plants[0].planted_at == '2026-04-01T08:00:00'
        assert plants[0].stage == 'seedling'

    def test_unknown_catalog_plants_are_skipped(self):
        catalog = {'tomato': PLANTS['tomato']}
        plants = build_template_plants(get_template('salsa'), catalog=catalog)
        assert [p.plant_id for p in plants] == ['tomato', 'tomato']

    def test_unknown_template(self):
        assert get_template('moon-garden') is None
