"""Tests for decoding the embedded measurement table."""

import csv
import io
import logging

import pytest

from lightspeed_chart.dataset import (
    MEASUREMENTS,
    PLACEHOLDER,
    SPEED_OF_LIGHT_CSV,
    Decoded,
    DecodeFailed,
    Measurement,
    decode_measurements,
    load_measurements,
)


def literal_rows():
    reader = csv.reader(io.StringIO(SPEED_OF_LIGHT_CSV))
    next(reader)
    return [row for row in reader if row]


def test_embedded_table_has_57_rows():
    assert len(MEASUREMENTS) == 57
    assert len(literal_rows()) == 57


def test_every_row_matches_its_literal_values():
    for record, row in zip(MEASUREMENTS, literal_rows()):
        assert record.sequence == int(row[0])
        assert record.year == float(row[1])
        assert record.observer == row[2]
        assert record.method == row[3]
        assert record.value == float(row[4])
        assert record.uncertainty == (float(row[5]) if row[5] else 0.0)


def test_sequence_numbers_follow_row_order():
    assert [m.sequence for m in MEASUREMENTS] == list(range(1, 58))


def test_row_26():
    record = MEASUREMENTS[25]
    assert record.sequence == 26
    assert record.year == 1949
    assert record.value == 299792.4
    assert record.uncertainty == 2.4


def test_missing_uncertainty_decodes_to_zero():
    glasenapp = MEASUREMENTS[3]
    assert glasenapp.sequence == 4
    assert glasenapp.observer == "Glasenapp"
    assert glasenapp.uncertainty == 0.0
    assert glasenapp.value == 300050


def test_first_row_has_zero_uncertainty():
    assert MEASUREMENTS[0].uncertainty == 0


def test_quoted_observer_keeps_comma():
    assert MEASUREMENTS[22].observer == "Michelson, Pease and Pearson"


def test_records_are_immutable():
    with pytest.raises(AttributeError):
        MEASUREMENTS[0].value = 1.0


@pytest.mark.parametrize(
    "blob",
    [
        "this is not a table",
        "",
        "sequence,date,observer,method,value,uncertainty\n1,1676,Rømer\n",
        "sequence,date,observer,method,value,uncertainty\n1,2,3,4,5,6,7\n",
    ],
)
def test_unparsable_blob_falls_back_to_placeholder(blob):
    assert isinstance(decode_measurements(blob), DecodeFailed)
    assert load_measurements(blob) == (PLACEHOLDER,)


def test_placeholder_is_all_defaults():
    assert PLACEHOLDER == Measurement(
        sequence=0, year=0, observer="", method="", value=0, uncertainty=0
    )


def test_fallback_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="lightspeed_chart.dataset"):
        load_measurements("garbage")
    assert "placeholder" in caplog.text


def test_non_numeric_fields_default_to_zero_independently():
    blob = "sequence,date,observer,method,value,uncertainty\nx,1900.5,Someone,Guess,fast,3\n"
    result = decode_measurements(blob)
    assert isinstance(result, Decoded)
    (record,) = result.records
    assert record == Measurement(
        sequence=0, year=1900.5, observer="Someone", method="Guess", value=0.0, uncertainty=3.0
    )


def test_header_only_table_decodes_to_no_records():
    result = decode_measurements("sequence,date,observer,method,value,uncertainty\n")
    assert result == Decoded(())
