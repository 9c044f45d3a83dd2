"""Tests for lineedit.search.SearchState."""

from __future__ import annotations

from lineedit.search import SearchState


class TestSearchStateEpisodes:
    def test_starts_idle(self) -> None:
        s = SearchState()
        assert not s.active

    def test_begin_activates_and_clears_term(self) -> None:
        s = SearchState(term="old")
        s.begin()
        assert s.active
        assert s.term == ""
        assert s.last_term == "old"
        assert s.match_at is None

    def test_begin_with_empty_term_keeps_last_term(self) -> None:
        s = SearchState(last_term="prev")
        s.begin()
        assert s.last_term == "prev"

    def test_end(self) -> None:
        s = SearchState()
        s.begin()
        s.end()
        assert not s.active

    def test_prompt_shows_term(self) -> None:
        s = SearchState(term="ab")
        assert s.prompt == "(reverse-i-search)`ab': "


class TestSearchStateMatching:
    def test_matches_at(self) -> None:
        s = SearchState(term="ga")
        assert s.matches_at("omega", 3)
        assert not s.matches_at("omega", 2)
        assert not s.matches_at("omega", 5)

    def test_from_end_finds_last_occurrence(self) -> None:
        s = SearchState(term="a")
        assert s.find_in_line("gamma", 5) == 4

    def test_repeating_from_match_walks_backwards(self) -> None:
        s = SearchState(term="a", match_at=4)
        assert s.find_in_line("gamma", 4) == 1
        s.match_at = 1
        assert s.find_in_line("gamma", 1) is None

    def test_cursor_not_on_match_includes_cursor_position(self) -> None:
        s = SearchState(term="a")
        assert s.find_in_line("gamma", 1) == 1

    def test_no_occurrence(self) -> None:
        s = SearchState(term="z")
        assert s.find_in_line("gamma", 5) is None
        assert s.find_in_line("", 0) is None

    def test_match_may_run_past_cursor(self) -> None:
        s = SearchState(term="mm", match_at=3)
        assert s.find_in_line("gamma", 3) == 2
