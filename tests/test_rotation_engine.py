"""
tests/test_rotation_engine.py - Unit tests for crop rotation tracking.

Tests:
1. Saving a year records one "x-y:family" entry per cell
2. Warnings fire for the same family in the same cell within 3 years
3. Follower family suggestions
"""

from models import Garden, PlacedPlant
from rotation_engine import (
    save_to_rotation_history, get_rotation_warnings, get_rotation_suggestions,
    clear_rotation_history, parse_history_entry, get_plant_family,
)


def make_garden(*plants, history=None):
    return Garden(
        id='garden-test',
        plants=[PlacedPlant(id=f"{pid}-{x}-{y}", plant_id=pid, x=x, y=y) for pid, x, y in plants],
        rotation_history=history or {},
    )


class TestSaveHistory:
    def test_records_family_per_cell(self):
        garden = make_garden(('tomato', 0, 0), ('pepper', 1, 0), ('basil', 2, 0))
        entries = save_to_rotation_history(garden, 2025)

        assert entries == ['0-0:nightshade', '1-0:nightshade', '2-0:mint']
        assert garden.rotation_history == {'2025': entries}

    def test_plants_without_family_are_skipped(self):
        garden = make_garden(('nasturtium', 0, 0), ('triffid', 1, 0))
        assert save_to_rotation_history(garden, 2025) == []

    def test_saving_same_year_overwrites(self):
        garden = make_garden(('tomato', 0, 0))
        save_to_rotation_history(garden, 2025)
        garden.plants = [PlacedPlant(id='beans-0-0', plant_id='beans', x=0, y=0)]
        save_to_rotation_history(garden, 2025)
        assert garden.rotation_history['2025'] == ['0-0:legume']

    def test_clear(self):
        garden = make_garden(('tomato', 0, 0), history={'2024': ['0-0:nightshade']})
        clear_rotation_history(garden)
        assert garden.rotation_history == {}


class TestWarnings:
    def test_same_family_same_cell_within_window(self):
        garden = make_garden(('tomato', 2, 3), history={'2024': ['2-3:nightshade']})
        warnings = get_rotation_warnings(garden, 2026)

        assert len(warnings) == 1
        warning = warnings[0]
        assert (warning['x'], warning['y']) == (2, 3)
        assert warning['plantId'] == 'tomato'
        assert warning['family'] == 'nightshade'
        assert warning['years'] == [2024]
        assert '2024' in warning['message']

    def test_three_years_later_is_fine(self):
        garden = make_garden(('tomato', 2, 3), history={'2024': ['2-3:nightshade']})
        assert get_rotation_warnings(garden, 2027) == []

    def test_other_family_or_other_cell_is_fine(self):
        garden = make_garden(('beans', 2, 3), ('pepper', 0, 0),
                             history={'2025': ['2-3:nightshade', '1-1:nightshade']})
        assert get_rotation_warnings(garden, 2026) == []

    def test_one_warning_per_recent_year(self):
        garden = make_garden(('eggplant', 1, 1),
                             history={'2024': ['1-1:nightshade'], '2025': ['1-1:nightshade']})
        warnings = get_rotation_warnings(garden, 2026)
        assert sorted(w['years'][0] for w in warnings) == [2024, 2025]

    def test_malformed_entries_are_ignored(self):
        garden = make_garden(('tomato', 0, 0), history={'2025': ['garbage', '0-0:'], 'someday': ['0-0:nightshade']})
        assert get_rotation_warnings(garden, 2026) == []

    def test_parse_history_entry(self):
        assert parse_history_entry('3-4:legume') == ('3-4', 'legume')
        assert parse_history_entry('nope') == (None, None)

    def test_plant_family_lookup(self):
        assert get_plant_family('tomato') == 'nightshade'
        assert get_plant_family('nasturtium') is None
        assert get_plant_family('triffid') is None


class TestSuggestions:
    def test_one_suggestion_per_family(self):
        garden = make_garden(('tomato', 0, 0), ('pepper', 1, 0), ('tomato', 2, 0))
        (suggestion,) = get_rotation_suggestions(garden)

        assert suggestion['family'] == 'nightshade'
        assert suggestion['plantIds'] == ['tomato', 'pepper']
        assert [f['family'] for f in suggestion['goodFollowers']] == ['legume', 'cucurbit', 'brassica']

    def test_family_without_followers_gets_empty_list(self):
        garden = make_garden(('basil', 0, 0))
        (suggestion,) = get_rotation_suggestions(garden)
        assert suggestion['family'] == 'mint'
        assert suggestion['goodFollowers'] == []

    def test_empty_garden(self):
        assert get_rotation_suggestions(make_garden()) == []
