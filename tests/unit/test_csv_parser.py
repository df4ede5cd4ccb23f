"""Tests for the CSV record parsers."""

from __future__ import annotations

import pytest

from census_admin.exceptions import AppError
from census_admin.imports.base import RecordParser, parse_int
from census_admin.imports.csv_parser import NaiveCSVParser, QuotedCSVParser, get_parser
from census_admin.imports.schemas import ImportCandidateRecord
from tests.fakes import csv_text


def test_single_row_maps_columns_in_order():
    parsed = NaiveCSVParser().parse(csv_text("L1,Dupont,Jean,06123456,4,2,ok"))

    assert parsed.records == [
        ImportCandidateRecord(
            lot_number="L1",
            family_name="Dupont",
            responsible_name="Jean",
            contact="06123456",
            inhabitants=4,
            children=2,
            notes="ok",
        )
    ]
    assert parsed.skipped_lines == 0


def test_header_is_skipped_without_checking_names():
    parsed = NaiveCSVParser().parse(csv_text("L1,A,B,12345678,1,0", header="x,y,z"))
    assert len(parsed.records) == 1
    assert parsed.records[0].lot_number == "L1"


def test_short_lines_are_dropped_and_counted():
    text = csv_text("L1,A,B,12345678,1,0", "L2,A,B", "only-one-field")
    parsed = NaiveCSVParser().parse(text)

    assert [r.lot_number for r in parsed.records] == ["L1"]
    assert parsed.skipped_lines == 2


def test_all_short_lines_yield_nothing():
    parsed = NaiveCSVParser().parse(csv_text("a,b,c", "d,e,f,g,h"))
    assert parsed.records == []


def test_blank_lines_and_carriage_returns_are_ignored():
    text = "lot,family,resp,contact,inh,children\r\n\r\n   \nL1,A,B,12345678,3,1\r\n\n"
    parsed = NaiveCSVParser().parse(text)

    assert len(parsed.records) == 1
    assert parsed.records[0].children == 1
    assert parsed.records[0].notes == ""


def test_values_are_trimmed_and_lose_one_pair_of_quotes():
    parsed = NaiveCSVParser().parse(csv_text(' "L1" , ""Dupont"", Jean ,"06123456",4,2'))
    record = parsed.records[0]

    assert record.lot_number == "L1"
    assert record.family_name == '"Dupont"'
    assert record.responsible_name == "Jean"
    assert record.contact == "06123456"


def test_non_numeric_counts_become_zero():
    parsed = NaiveCSVParser().parse(csv_text("L1,A,B,12345678,many,,note"))
    record = parsed.records[0]

    assert record.inhabitants == 0
    assert record.children == 0


def test_naive_parser_splits_quoted_commas():
    parsed = NaiveCSVParser().parse(csv_text('L1,A,B,12345678,2,1,"tall, blue house"'))
    assert parsed.records[0].notes == "tall"


def test_quoted_parser_keeps_commas_inside_quotes():
    parsed = QuotedCSVParser().parse(csv_text('L1,A,B,12345678,2,1,"tall, blue house"'))
    assert parsed.records[0].notes == "tall, blue house"


def test_quoted_parser_drops_short_rows():
    parsed = QuotedCSVParser().parse(csv_text("L1,A,B", "", "L2,A,B,12345678,2,1"))

    assert [r.lot_number for r in parsed.records] == ["L2"]
    assert parsed.skipped_lines == 1


def test_parsing_is_deterministic():
    text = csv_text("L1,A,B,12345678,2,1", "L2,C,D,87654321,3,0,x", "bad")
    parser = NaiveCSVParser()
    assert parser.parse(text) == parser.parse(text)


def test_record_count_never_exceeds_body_lines():
    rows = ["L1,A,B,12345678,2,1", "short", "L3,A,B,12345678,2,1", "L4,A,B,1,0,0"]
    parsed = NaiveCSVParser().parse(csv_text(*rows))
    assert len(parsed.records) <= len(rows)
    assert len(parsed.records) + parsed.skipped_lines == len(rows)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("4", 4), ("-1", -1), (" 7 ", 7), ("3.7", 3), ("12abc", 12), ("abc", 0), ("", 0)],
)
def test_parse_int_reads_leading_integer(raw, expected):
    assert parse_int(raw) == expected


def test_decode_falls_back_to_latin1():
    assert RecordParser.decode("Hélène".encode("latin-1")) == "Hélène"
    assert RecordParser.decode("Hélène".encode("utf-8")) == "Hélène"


def test_get_parser_selects_implementation():
    assert isinstance(get_parser("naive"), NaiveCSVParser)
    assert isinstance(get_parser("quoted"), QuotedCSVParser)
    with pytest.raises(AppError):
        get_parser("excel")


def test_oversized_number_becomes_zero():
    assert parse_int("1" * 5000) == 0

    parsed = NaiveCSVParser().parse(csv_text(f"L1,Dupont,Jean,06123456,{'1' * 5000},2"))
    assert parsed.records[0].inhabitants == 0


@pytest.mark.parametrize("raw", ["٤", "４", "²"])
def test_non_ascii_digits_are_not_numbers(raw):
    assert parse_int(raw) == 0


def test_quoted_parser_reports_unreadable_field():
    huge = "x" * 200_000
    with pytest.raises(AppError) as exc_info:
        QuotedCSVParser().parse(csv_text(f'L1,A,B,12345678,2,1,"{huge}"'))

    assert exc_info.value.code == "PARSE_ERROR"
