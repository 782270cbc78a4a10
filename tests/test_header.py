import pytest

from qvdsym.boundary import find_boundary
from qvdsym.data.generator import build_qvd
from qvdsym.errors import FormatError
from qvdsym.header import parse_header

HEADER = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<QvdTableHeader>
  <QvBuildNo>50467</QvBuildNo>
  <TableName>Sales</TableName>
  <Fields>
    <QvdFieldHeader>
      <FieldName>Region</FieldName>
      <BitOffset>0</BitOffset>
      <BitWidth>3</BitWidth>
      <Bias>0</Bias>
      <NoOfSymbols>6</NoOfSymbols>
      <Offset>0</Offset>
      <Length>30</Length>
    </QvdFieldHeader>
    <QvdFieldHeader>
      <FieldName>Amount</FieldName>
      <BitOffset>3</BitOffset>
      <BitWidth>5</BitWidth>
      <Bias>-2</Bias>
      <NoOfSymbols>20</NoOfSymbols>
      <Offset>30</Offset>
      <Length>100</Length>
    </QvdFieldHeader>
  </Fields>
  <NoOfRecords>1000</NoOfRecords>
  <RecordByteSize>1</RecordByteSize>
  <Offset>130</Offset>
  <Length>1000</Length>
</QvdTableHeader>
"""


def test_parse_header_reads_table_and_fields():
    header = parse_header(HEADER)
    assert header.table_name == "Sales"
    assert header.no_of_records == 1000
    assert header.offset == 130
    assert [f.name for f in header.fields] == ["Region", "Amount"]
    amount = header.fields[1]
    assert (amount.offset, amount.length) == (30, 100)
    assert amount.bias == -2
    assert amount.bit_width == 5
    assert amount.no_of_symbols == 20


def test_parse_header_requires_offset_and_length():
    text = (
        "<QvdTableHeader><Fields><QvdFieldHeader><FieldName>A</FieldName>"
        "<Offset>0</Offset></QvdFieldHeader></Fields></QvdTableHeader>"
    )
    with pytest.raises(FormatError, match="Length"):
        parse_header(text)


def test_parse_header_rejects_non_integer_offset():
    text = (
        "<QvdTableHeader><Fields><QvdFieldHeader><FieldName>A</FieldName>"
        "<Offset>x</Offset><Length>1</Length></QvdFieldHeader></Fields></QvdTableHeader>"
    )
    with pytest.raises(FormatError, match="Offset"):
        parse_header(text)


def test_parse_header_rejects_malformed_xml():
    with pytest.raises(FormatError):
        parse_header("<QvdTableHeader><Fields>")


def test_generated_header_round_trips_layout():
    data = build_qvd({"Name": ["a", "bb"], "Id": [1, 2, 3]})
    header = parse_header(find_boundary(data).header)
    name, ident = header.fields
    assert (name.offset, name.length, name.no_of_symbols) == (0, 7, 2)
    assert (ident.offset, ident.length, ident.no_of_symbols) == (7, 15, 3)
