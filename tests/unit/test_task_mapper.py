"""
Test per TaskMapper
"""
import logging

import pytest

from src.services.csv_import.task_mapper import TaskMapper


class TestHeaderNormalization:

    @pytest.mark.parametrize("header", ["due_type", "due-type", "duetype", "Due-Type", " DUE_TYPE "])
    def test_due_type_variants_map_to_same_field(self, header):
        assert TaskMapper.resolve_field(header) == "due_type"

    @pytest.mark.parametrize("header", ["checklist-items", "checklist_items", "checklist"])
    def test_checklist_variants(self, header):
        assert TaskMapper.resolve_field(header) == "checklist_items"

    def test_unknown_header(self):
        assert TaskMapper.resolve_field("patient_name") is None


class TestMapRow:

    def test_title_only_gets_defaults(self):
        task = TaskMapper.map_row(["title"], ["Sterilize instruments"], 1)

        assert task.title == "Sterilize instruments"
        assert task.description == ""
        assert task.category == "operational"
        assert task.priority == "medium"
        assert task.due_type == "anytime"
        assert task.recurrence == "once"
        assert task.owner_notes == ""
        assert task.checklist_items == []
        assert task.due_date is None
        assert task.assigned_to is None

    def test_values_are_kept_verbatim(self):
        headers = ["title", "category", "priority", "due_type", "recurrence", "owner-notes", "assigned-to"]
        values = ["Order supplies", "administrative", "high", "end_of_week", "weekly", "Call vendor", "Dr. Smith"]

        task = TaskMapper.map_row(headers, values, 1)

        assert task.category == "administrative"
        assert task.priority == "high"
        assert task.due_type == "end_of_week"
        assert task.recurrence == "weekly"
        assert task.owner_notes == "Call vendor"
        assert task.assigned_to == "Dr. Smith"

    def test_invalid_enum_is_not_rejected(self):
        task = TaskMapper.map_row(["title", "priority"], ["Check X-ray", "urgent"], 1)
        assert task.priority == "urgent"

    @pytest.mark.parametrize("values", [[""], ["A"], [" "]])
    def test_missing_or_short_title_is_skipped(self, values, caplog):
        with caplog.at_level(logging.WARNING):
            assert TaskMapper.map_row(["title"], values, 3) is None
        assert "Skipping row 3 - invalid or missing title" in caplog.text

    def test_short_row_is_padded(self):
        task = TaskMapper.map_row(["title", "description", "priority"], ["Restock gloves"], 1)
        assert task.description == ""
        assert task.priority == "medium"

    def test_unknown_headers_are_ignored(self):
        task = TaskMapper.map_row(["title", "room"], ["Restock gloves", "Op 2"], 1)
        assert task.title == "Restock gloves"
        assert "room" not in task.model_dump()

    def test_checklist_split_on_pipe(self):
        task = TaskMapper.map_row(
            ["title", "checklist-items"],
            ["Open clinic", "Unlock doors| Turn on lights ||Check temperature|"],
            1
        )
        assert task.checklist_items == ["Unlock doors", "Turn on lights", "Check temperature"]


class TestDates:

    def test_naive_date_is_utc(self):
        assert TaskMapper.to_iso_date("2024-01-15") == "2024-01-15T00:00:00.000Z"

    def test_datetime_with_zone_is_converted(self):
        assert TaskMapper.to_iso_date("2024-01-15T10:30:00+01:00") == "2024-01-15T09:30:00.000Z"

    def test_z_suffix(self):
        assert TaskMapper.to_iso_date("2024-01-15T09:00:00Z") == "2024-01-15T09:00:00.000Z"

    def test_unparseable_date_is_dropped(self):
        task = TaskMapper.map_row(["title", "due-date"], ["Check autoclave", "whenever"], 1)
        assert task.due_date is None

    def test_due_date_is_stored_as_iso(self):
        task = TaskMapper.map_row(
            ["title", "due-date", "custom-due-date"],
            ["Check autoclave", "2024-03-01 14:00", "2024-03-02"],
            1
        )
        assert task.due_date == "2024-03-01T14:00:00.000Z"
        assert task.custom_due_date == "2024-03-02T00:00:00.000Z"


class TestAttachments:

    def test_json_is_decoded(self):
        task = TaskMapper.map_row(
            ["title", "attachments"],
            ['Protocol review', '[{"name": "protocol.pdf"}]'],
            1
        )
        assert task.attachments == [{"name": "protocol.pdf"}]

    def test_invalid_json_keeps_raw_string(self):
        assert TaskMapper.parse_attachments("protocol.pdf") == "protocol.pdf"

    def test_deeply_nested_json_keeps_raw_string(self):
        nested = "[" * 5000 + "]" * 5000
        assert TaskMapper.parse_attachments(nested) == nested
