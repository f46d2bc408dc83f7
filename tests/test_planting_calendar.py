"""
tests/test_planting_calendar.py - Unit tests for frost-date planting events and succession sowing.
"""

from datetime import date, timedelta

import pytest

from plant_catalog import PLANTS
from planting_calendar import (
    compute_calendar_events, get_last_frost, get_first_frost,
    get_succession_schedule, generate_succession_dates,
)


def events_by_type(events, plant_id):
    return {e.type: e.date for e in events if e.plant_id == plant_id}


class TestFrostDates:
    def test_zone_6(self):
        assert get_last_frost(6, 2026) == date(2026, 4, 1)
        assert get_first_frost(6, 2026) == date(2026, 10, 20)

    def test_unknown_zone(self):
        assert get_last_frost(2, 2026) is None
        assert compute_calendar_events(['tomato'], 2, 2026) == []


class TestCalendarEvents:
    def test_tomato_in_zone_6(self):
        events = compute_calendar_events(['tomato'], 6, 2026)

        assert [e.type for e in events] == ['start-indoors', 'transplant', 'harvest']
        dates = events_by_type(events, 'tomato')
        assert dates['start-indoors'] == date(2026, 2, 18)
        assert dates['transplant'] == date(2026, 4, 15)
        assert dates['harvest'] == date(2026, 7, 4)

    def test_direct_sown_plant(self):
        events = compute_calendar_events(['carrot'], 6, 2026)
        dates = events_by_type(events, 'carrot')
        assert set(dates) == {'direct-sow', 'harvest'}
        assert dates['direct-sow'] == date(2026, 4, 1)
        assert dates['harvest'] == date(2026, 4, 1) + timedelta(days=70)

    def test_started_indoors_but_never_transplanted(self):
        dates = events_by_type(compute_calendar_events(['onion'], 6, 2026), 'onion')
        assert set(dates) == {'start-indoors', 'harvest'}
        assert dates['start-indoors'] == date(2026, 1, 21)
        assert dates['harvest'] == date(2026, 4, 1) + timedelta(days=100)

    @pytest.mark.parametrize('plant_id', [p.id for p in PLANTS.values() if p.transplant_weeks > 0])
    def test_harvest_follows_transplant_by_days_to_maturity(self, plant_id):
        dates = events_by_type(compute_calendar_events([plant_id], 7, 2026), plant_id)
        assert (dates['harvest'] - dates['transplant']).days == PLANTS[plant_id].days_to_maturity

    def test_duplicates_and_unknown_ids(self):
        events = compute_calendar_events(['tomato', 'tomato', 'triffid'], 6, 2026)
        assert len(events) == 3

    def test_events_are_sorted_by_date(self):
        events = compute_calendar_events(['tomato', 'carrot', 'basil', 'onion'], 6, 2026)
        assert [e.date for e in events] == sorted(e.date for e in events)
        # Stable sort keeps tomato before basil on Feb 18
        feb_18 = [e.plant_id for e in events if e.date == date(2026, 2, 18)]
        assert feb_18 == ['tomato', 'basil']

    def test_event_serializes_iso_date(self):
        event = compute_calendar_events(['tomato'], 6, 2026)[0]
        assert event.to_dict()['date'] == '2026-02-18'
        assert event.to_dict()['plantName'] == 'Tomato'


class TestSuccession:
    def test_lettuce_dates_in_zone_6(self):
        dates = generate_succession_dates(6, ['spring', 'fall'], 14, 2026)
        assert dates[0] == date(2026, 4, 1)
        assert date(2026, 7, 22) in dates
        assert len(dates) == 10

    def test_today_filters_past_dates(self):
        dates = generate_succession_dates(6, ['spring', 'fall'], 14, 2026, today=date(2026, 9, 1))
        assert dates == [date(2026, 9, 2), date(2026, 9, 16)]

    def test_schedule_only_lists_succession_crops(self):
        schedule = get_succession_schedule(['tomato', 'lettuce', 'lettuce'], 6, 2026)
        assert [s['plantId'] for s in schedule] == ['lettuce']
        assert schedule[0]['interval'] == 14
        assert schedule[0]['plantingDates'][0] == '2026-04-01'

    def test_season_filter(self):
        assert get_succession_schedule(['lettuce', 'beans'], 6, 2026, season='summer')[0]['plantId'] == 'beans'
        assert len(get_succession_schedule(['lettuce', 'beans'], 6, 2026, season='summer')) == 1
