import pytest

from csvdata import SCENARIO_CSV, flight_csv, flight_row
from travelglobe.flights.errors import NoFlightsError
from travelglobe.flights.importer import (COUNTRIES_SETTING, IMPORT_MARKER, destination_notes, imported_code,
                                          merge_flight_csv)
from travelglobe.flights.aggregate import DestinationAggregate
from travelglobe.flights.sources import TextCsvSource
from travelglobe.models.location import Location
from travelglobe.storage import LocationStore, SettingStore


class BrokenSource:
    def fetch(self):
        raise OSError("disk on fire")


def visited(db):
    db.expire_all()
    return LocationStore(db).list_by_type("visited")


def snapshot(db):
    return sorted((loc.name, loc.latitude, loc.longitude, loc.notes) for loc in visited(db))


def test_scenario_import(importer, db):
    result = importer.run_import(TextCsvSource(SCENARIO_CSV))

    assert result.flights_processed == 2
    assert result.destinations_added == 1
    assert not result.skipped

    location, = visited(db)
    assert location.name == "New York, USA"
    assert (location.latitude, location.longitude) == (40.6398, -73.7789)
    assert location.notes == "Flight destination: JFK (2 visits)"
    assert location.visit_date is None


def test_import_twice_is_idempotent(importer, db):
    importer.run_import(TextCsvSource(SCENARIO_CSV))
    first = visited(db)
    before = snapshot(db)

    result = importer.run_import(TextCsvSource(SCENARIO_CSV))

    assert result.destinations_added == 0
    assert result.destinations_removed == 0
    assert result.destinations_updated == 0
    assert snapshot(db) == before
    assert [loc.id for loc in visited(db)] == [loc.id for loc in first]


def test_reimport_reflects_latest_csv(importer, db):
    importer.run_import(TextCsvSource(flight_csv(
        flight_row("2024-01-01", "AF", "AF 1", "JFK", "CDG"),
        flight_row("2024-01-08", "AA", "AA 2", "CDG", "LAX"),
    )))
    cdg_id = next(loc.id for loc in visited(db) if "CDG" in loc.notes)

    result = importer.run_import(TextCsvSource(flight_csv(
        flight_row("2024-01-01", "AF", "AF 1", "JFK", "CDG"),
        flight_row("2024-02-01", "AF", "AF 3", "JFK", "CDG"),
        flight_row("2024-03-01", "BA", "BA 4", "CDG", "LHR"),
    )))

    assert (result.destinations_added, result.destinations_updated, result.destinations_removed) == (1, 1, 1)
    notes = {imported_code(loc): loc for loc in visited(db)}
    assert set(notes) == {"CDG", "LHR"}
    assert notes["CDG"].notes == "Flight destination: CDG (2 visits)"
    assert notes["CDG"].id == cdg_id


def test_nearby_manual_location_is_not_duplicated(importer, db):
    store = LocationStore(db)
    store.create({"name": "JFK airport", "latitude": 40.641, "longitude": -73.775, "type": "visited",
                  "notes": "Layover"})

    result = importer.run_import(TextCsvSource(SCENARIO_CSV))

    assert result.destinations_added == 0
    assert [loc.name for loc in visited(db)] == ["JFK airport"]


def test_tolerance_applies_to_any_location_type(importer, db):
    LocationStore(db).create({"name": "Queens", "latitude": 40.6398, "longitude": -73.7789, "type": "home"})
    assert importer.run_import(TextCsvSource(SCENARIO_CSV)).destinations_added == 0


def test_location_just_outside_tolerance_does_not_block(importer, db):
    LocationStore(db).create({"name": "Brooklyn", "latitude": 40.7128, "longitude": -74.0060, "type": "home"})
    assert importer.run_import(TextCsvSource(SCENARIO_CSV)).destinations_added == 1


def test_manual_rows_survive_reimport(importer, db):
    LocationStore(db).create({"name": "Paris, France", "latitude": 48.8566, "longitude": 2.3522,
                              "type": "visited", "visit_date": "2024-03", "notes": "Amazing food"})
    importer.run_import(TextCsvSource(SCENARIO_CSV))
    importer.run_import(TextCsvSource(flight_csv(flight_row("2024-01-01", "AA", "AA 1", "JFK", "LAX"))))

    names = sorted(loc.name for loc in visited(db))
    assert names == ["Los Angeles, USA", "Paris, France"]


@pytest.mark.parametrize("source", [TextCsvSource(""), TextCsvSource(None), TextCsvSource("  \n")])
def test_empty_source_leaves_store_untouched(importer, db, source):
    LocationStore(db).create({"name": "Old import", "latitude": 1.0, "longitude": 1.0, "type": "visited",
                              "notes": f"{IMPORT_MARKER}: XXX (1 visit)"})

    result = importer.run_import(source)

    assert result.skipped
    assert result.flights_processed == 0
    assert [loc.name for loc in visited(db)] == ["Old import"]
    assert SettingStore(db).get(COUNTRIES_SETTING) is None


def test_fetch_errors_are_swallowed(importer, db):
    result = importer.run_import(BrokenSource())
    assert result.skipped
    assert visited(db) == []


def test_store_failure_skips_only_that_destination(importer, db, monkeypatch):
    original = LocationStore.create

    def flaky_create(self, fields):
        if "LAX" in (fields.get("notes") or ""):
            raise RuntimeError("constraint violation")
        return original(self, fields)

    monkeypatch.setattr(LocationStore, "create", flaky_create)
    result = importer.run_import(TextCsvSource(flight_csv(
        flight_row("2024-01-01", "AA", "AA 1", "JFK", "LAX"),
        flight_row("2024-01-02", "AA", "AA 2", "LAX", "SFO"),
        flight_row("2024-01-03", "AA", "AA 3", "SFO", "CDG"),
    )))

    assert result.flights_processed == 3
    assert result.destinations_added == 2
    assert sorted(imported_code(loc) for loc in visited(db)) == ["CDG", "SFO"]


def test_import_updates_countries_setting(importer, db):
    importer.run_import(TextCsvSource(flight_csv(
        flight_row("2024-01-01", "AF", "AF 1", "JFK", "CDG"),
        flight_row("2024-01-08", "AA", "AA 2", "CDG", "LAX"),
        flight_row("2024-01-09", "AA", "AA 3", "LAX", "SFO"),
    )))
    db.expire_all()
    assert SettingStore(db).get(COUNTRIES_SETTING).value == "2"


def test_duplicate_importer_rows_are_collapsed(importer, db):
    store = LocationStore(db)
    for _ in range(2):
        store.create({"name": "New York, USA", "latitude": 40.6398, "longitude": -73.7789, "type": "visited",
                      "notes": "Flight destination: JFK (2 visits)"})

    result = importer.run_import(TextCsvSource(SCENARIO_CSV))

    assert result.destinations_removed == 1
    assert len(visited(db)) == 1


def test_destination_notes():
    jfk = DestinationAggregate("JFK", "John F. Kennedy International Airport", "New York", "USA", 40.6, -73.7)
    assert destination_notes(jfk) == "Flight destination: JFK (1 visit)"
    jfk.visit_count = 3
    assert destination_notes(jfk) == "Flight destination: JFK (3 visits)"
    assert imported_code(Location(notes=destination_notes(jfk))) == "JFK"
    assert imported_code(Location(notes="Business trip")) is None


def test_merge_into_empty_history(directory):
    merged = merge_flight_csv(None, SCENARIO_CSV, directory)
    assert merged.text == SCENARIO_CSV
    assert (merged.processed, merged.added, merged.duplicates) == (2, 2, 0)


def test_merge_skips_known_flights(directory):
    existing = flight_csv(flight_row("2024-01-05", "B6", "B6 616", "SFO", "JFK"))
    new_row = flight_row("2024-02-11", "DL", "DL 423", "LAX", "JFK")

    merged = merge_flight_csv(existing, SCENARIO_CSV, directory)

    assert (merged.processed, merged.added, merged.duplicates) == (2, 1, 1)
    assert merged.text == existing + new_row + "\n"


def test_merge_without_usable_flights(directory):
    with pytest.raises(NoFlightsError):
        merge_flight_csv(SCENARIO_CSV, flight_csv(flight_row("2024-01-01", "XX", "XX 1", "AAA", "ZZZ")), directory)


def test_manual_location_added_later_replaces_imported_row(importer, db):
    importer.run_import(TextCsvSource(SCENARIO_CSV))
    LocationStore(db).create({"name": "JFK manual", "latitude": 40.641, "longitude": -73.775,
                              "type": "visited"})

    result = importer.run_import(TextCsvSource(SCENARIO_CSV))

    assert result.destinations_removed == 1
    assert result.destinations_added == 0
    assert [loc.name for loc in visited(db)] == ["JFK manual"]


def test_countries_setting_failure_keeps_counts(importer, db, monkeypatch):
    def failing_set(self, key, value):
        raise RuntimeError("settings table locked")

    monkeypatch.setattr(SettingStore, "set", failing_set)
    result = importer.run_import(TextCsvSource(SCENARIO_CSV))

    assert not result.skipped
    assert result.flights_processed == 2
    assert result.destinations_added == 1
    assert result.countries == 1
    assert len(visited(db)) == 1
