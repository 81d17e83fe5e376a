"""Tests for the node model, parsing helpers and pydantic documents."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from taskgraph.errors import MalformedDataError
from taskgraph.models import Node, from_millis, parse_node_id, to_millis, to_seconds
from taskgraph.schemas import dump_node_document, parse_node_document


class TestNode:
    def test_new_node_has_fresh_random_id(self) -> None:
        a, b = Node.new(), Node.new()
        assert isinstance(a.id, uuid.UUID)
        assert a.id.version == 4
        assert a.id != b.id

    def test_new_ignores_supplied_id(self) -> None:
        fixed = uuid.UUID(int=7)
        assert Node.new(id=fixed, title="x").id != fixed

    def test_defaults_are_blank(self) -> None:
        node = Node.new()
        assert (node.title, node.description, node.scheduled, node.due) == ("", "", None, None)

    def test_naive_timestamp_treated_as_utc(self) -> None:
        node = Node.new(due=datetime(2024, 5, 6, 7, 8, 9))
        assert node.due == datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
        assert node.due.tzinfo == timezone.utc

    def test_timestamps_truncated_to_seconds(self) -> None:
        node = Node.new(scheduled=datetime(2024, 5, 6, 7, 8, 9, 999999, tzinfo=timezone.utc))
        assert node.scheduled.microsecond == 0

    def test_other_timezones_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        node = Node.new(due=datetime(2024, 5, 6, 12, 0, tzinfo=plus_two))
        assert node.due == datetime(2024, 5, 6, 10, 0, tzinfo=timezone.utc)
        assert node.due.tzinfo == timezone.utc

    def test_short_repr(self) -> None:
        node = Node(id=uuid.UUID(int=1), title="Write tests")
        assert node.short_repr() == "Write tests (00000000-0000-0000-0000-000000000001)"


class TestParsing:
    def test_parse_node_id_accepts_text_and_uuid(self) -> None:
        node_id = uuid.uuid4()
        assert parse_node_id(str(node_id)) == node_id
        assert parse_node_id(node_id) is node_id

    def test_parse_node_id_rejects_garbage(self) -> None:
        with pytest.raises(MalformedDataError):
            parse_node_id("not-a-uuid")

    def test_millis_round_trip(self) -> None:
        when = datetime(2023, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        assert from_millis(to_millis(when)) == when
        assert to_millis(None) is None
        assert from_millis(None) is None

    def test_naive_datetimes_convert_as_utc(self) -> None:
        naive = datetime(2030, 1, 1, 12, 0, 30, 500000)
        aware = datetime(2030, 1, 1, 12, 0, 30, tzinfo=timezone.utc)
        assert to_millis(naive) == to_millis(aware) == 1893499230000
        assert to_seconds(naive) == to_seconds(aware) == 1893499230

    def test_from_millis_out_of_range(self) -> None:
        with pytest.raises(MalformedDataError):
            from_millis(10**18)


class TestNodeDocument:
    def test_document_round_trip(self) -> None:
        node = Node.new(
            title="Renew passport",
            description="photo booth first",
            scheduled=datetime(2024, 2, 1, tzinfo=timezone.utc),
        )
        assert parse_node_document(dump_node_document(node)) == node

    def test_missing_fields_default_blank(self) -> None:
        node_id = uuid.uuid4()
        node = parse_node_document(f'{{"id": "{node_id}"}}')
        assert node == Node(id=node_id)

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            '{"title": "no id"}',
            '{"id": "nope"}',
            '{"id": "%s", "due": "tomorrow"}' % uuid.uuid4(),
        ],
    )
    def test_invalid_documents_raise(self, text: str) -> None:
        with pytest.raises(MalformedDataError):
            parse_node_document(text)
