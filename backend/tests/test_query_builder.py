"""
Tests for app.services.query_builder
====================================
Covers:
- q: passed through, empty string means no search
- sortBy: default ascending, exact "desc" only, public and column names
- sortBy: empty key, unknown key, missing direction tolerated
- fields: id always included, duplicates dropped, column names accepted,
  unknown names ignored, all-unknown falls back to every field

Run: pytest tests/test_query_builder.py -v
"""

from __future__ import annotations

import pytest

from app.models.exercise import ExerciseQuery
from app.services.query_builder import build_query, parse_fields, parse_sort


class TestSearch:

    def test_no_params_is_plain_query(self):
        assert build_query() == ExerciseQuery()

    def test_q_is_kept_verbatim(self):
        assert build_query(q="Push").search == "Push"

    def test_empty_q_means_no_search(self):
        assert build_query(q="").search is None


class TestSort:

    def test_missing_direction_is_ascending(self):
        assert parse_sort("title") == ("title", False)

    def test_desc(self):
        assert parse_sort("title:desc") == ("title", True)

    @pytest.mark.parametrize("direction", ["asc", "DESC", "descending", ""])
    def test_anything_but_desc_is_ascending(self, direction: str):
        assert parse_sort(f"title:{direction}") == ("title", False)

    def test_public_name_maps_to_column(self):
        assert parse_sort("durationMinutes:desc") == ("duration_minutes", True)
        assert parse_sort("createdAt") == ("created_at", False)

    def test_column_name_accepted(self):
        assert parse_sort("created_by:asc") == ("created_by", False)

    def test_empty_key_means_no_sort(self):
        assert parse_sort(":desc") == (None, True)
        assert build_query(sort_by=":desc").sort_column is None

    def test_unknown_key_means_no_sort(self):
        assert parse_sort("password:asc")[0] is None

    def test_extra_segments_ignored(self):
        assert parse_sort("title:desc:extra") == ("title", True)

    def test_none(self):
        assert parse_sort(None) == (None, False)


class TestFields:

    def test_id_is_prepended(self):
        assert parse_fields("title,muscle") == ("id", "title", "muscle")

    def test_whitespace_and_duplicates(self):
        assert parse_fields(" title , title,,muscle ") == ("id", "title", "muscle")

    def test_column_names_map_to_public_names(self):
        assert parse_fields("duration_minutes,created_by") == ("id", "durationMinutes", "createdBy")

    def test_unknown_names_dropped(self):
        assert parse_fields("title,password_hash") == ("id", "title")

    def test_all_unknown_means_everything(self):
        assert parse_fields("foo,bar") is None

    def test_explicit_id_not_duplicated(self):
        assert parse_fields("title,id") == ("title", "id")

    def test_columns_property(self):
        query = build_query(fields="durationMinutes")
        assert query.columns == ("id", "duration_minutes")
