import pytest

from csv_fingerprint.reader import ParseFailure, RawRecord, read_records


def outcomes(text, **kwargs):
    reader = read_records(text, **kwargs)
    return reader.header, list(reader)


def test_empty_input_has_no_header_and_no_records():
    assert outcomes("") == ([], [])


def test_header_only():
    assert outcomes("a,b\n") == (["a", "b"], [])


def test_records_are_numbered_from_line_two():
    header, records = outcomes("name,age\nAlice,30\nBob,\n")
    assert header == ["name", "age"]
    assert records == [
        RawRecord(line=2, values=["Alice", "30"]),
        RawRecord(line=3, values=["Bob", ""]),
    ]


def test_quoted_fields_keep_commas_quotes_and_newlines():
    _, records = outcomes('note,id\n"hello, ""world""\nagain",7\nplain,8\n')
    assert records == [
        RawRecord(line=2, values=['hello, "world"\nagain', "7"]),
        RawRecord(line=3, values=["plain", "8"]),
    ]


def test_crlf_line_endings():
    header, records = outcomes("a,b\r\n1,2\r\n")
    assert header == ["a", "b"]
    assert records == [RawRecord(line=2, values=["1", "2"])]


def test_blank_lines_are_skipped_without_consuming_a_line_number():
    _, records = outcomes("a,b\n\n1,2\n\n3,4")
    assert [r.line for r in records] == [2, 3]


def test_leading_bom_is_stripped():
    header, _ = outcomes("\ufeffa,b\n1,2\n")
    assert header == ["a", "b"]


def test_unterminated_quote_resyncs_at_next_line():
    _, records = outcomes('name,age\n"Carol,40\nDave,50\n')
    assert isinstance(records[0], ParseFailure)
    assert records[0].line == 2
    assert "unexpected end of data" in records[0].message
    assert records[1] == RawRecord(line=3, values=["Dave", "50"])


def test_text_after_closing_quote_is_a_parse_failure():
    _, records = outcomes('a,b\n"x"y,1\nz,2\n')
    assert isinstance(records[0], ParseFailure)
    assert records[1] == RawRecord(line=3, values=["z", "2"])


def test_unparseable_header_candidate_is_skipped():
    header, records = outcomes('"x\na,b\n1,2\n')
    assert header == ["a", "b"]
    assert records == [RawRecord(line=2, values=["1", "2"])]


def test_ragged_rows_pass_through_by_default():
    _, records = outcomes("a,b\n1\n1,2,3\n")
    assert records == [
        RawRecord(line=2, values=["1"]),
        RawRecord(line=3, values=["1", "2", "3"]),
    ]


def test_strict_width_turns_ragged_rows_into_failures():
    _, records = outcomes("a,b\n1\n1,2\n", strict_width=True)
    assert records[0] == ParseFailure(line=2, message="found record with 1 fields, but the header has 2 fields")
    assert records[1] == RawRecord(line=3, values=["1", "2"])


def test_reader_is_single_pass():
    reader = read_records("a\n1\n")
    list(reader)
    with pytest.raises(RuntimeError):
        iter(reader)


def test_fields_larger_than_the_csv_module_default_limit():
    big = "x" * 200_000
    _, records = outcomes("a,b\n%s,1\n" % big)
    assert records == [RawRecord(line=2, values=[big, "1"])]


def test_resync_replays_lines_of_a_failed_multiline_record():
    _, records = outcomes('a,b\n"x\n"y\nok,1\n')
    assert [type(r) for r in records] == [ParseFailure, ParseFailure, RawRecord]
    assert [r.line for r in records] == [2, 3, 4]
    assert records[2].values == ["ok", "1"]
