#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_reconstruct.py
"""Unit tests for fragment reconstruction."""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from docreflow.exceptions import InvalidOptionsError
from docreflow.options import ExtractionOptions, LayoutOptions
from docreflow.reconstruct import Fragment, FragmentReconstructor, reconstruct_document, reconstruct_page

fragments_strategy = st.lists(
    st.builds(
        Fragment,
        text=st.text(max_size=20),
        y=st.floats(min_value=-1000, max_value=1000, allow_nan=False),
    ),
    max_size=30,
)


@pytest.mark.unit
class TestReconstructPage:
    """Line grouping within a single page."""

    def test_resume_header_example(self):
        fragments = [
            Fragment("John Doe", 700),
            Fragment("Software Engineer", 694),
            Fragment("### Experience", 650),
        ]
        assert reconstruct_page(fragments) == "John Doe Software Engineer\n### Experience\n\n"

    def test_gap_of_seven_starts_new_line(self):
        fragments = [
            Fragment("John Doe", 700),
            Fragment("Software Engineer", 693),
            Fragment("### Experience", 650),
        ]
        assert reconstruct_page(fragments) == "John Doe\nSoftware Engineer\n### Experience\n\n"

    def test_close_fragments_join_with_one_space(self):
        assert reconstruct_page([Fragment("Hello", 100), Fragment("world", 94)]) == "Hello world\n\n"

    def test_gap_equal_to_threshold_stays_on_line(self):
        assert reconstruct_page([Fragment("a", 100), Fragment("b", 106)]) == "a b\n\n"

    def test_gap_above_threshold_breaks_line(self):
        assert reconstruct_page([Fragment("a", 100), Fragment("b", 93.5)]) == "a\nb\n\n"

    def test_upward_jump_also_breaks_line(self):
        assert reconstruct_page([Fragment("a", 100), Fragment("b", 150)]) == "a\nb\n\n"

    def test_no_extra_space_after_trailing_whitespace(self):
        assert reconstruct_page([Fragment("Skills: ", 50), Fragment("Python", 50)]) == "Skills: Python\n\n"

    def test_whitespace_fragments_are_skipped(self):
        fragments = [Fragment("Name", 700), Fragment("   ", 600), Fragment("", 500), Fragment("Title", 699)]
        # The skipped fragments do not move the reference position
        assert reconstruct_page(fragments) == "Name Title\n\n"

    def test_empty_page_is_just_the_separator(self):
        assert reconstruct_page([]) == "\n\n"
        assert reconstruct_page([Fragment("  \t", 10)]) == "\n\n"

    def test_missing_position_defaults_to_zero(self):
        assert reconstruct_page([Fragment("a"), Fragment("b", 3)]) == "a b\n\n"

    def test_custom_threshold(self):
        fragments = [Fragment("a", 100), Fragment("b", 92)]
        assert reconstruct_page(fragments, gap_threshold=6) == "a\nb\n\n"
        assert reconstruct_page(fragments, gap_threshold=10) == "a b\n\n"

    def test_generator_input(self):
        page = (Fragment(word, 10) for word in ["one", "two"])
        assert reconstruct_page(page) == "one two\n\n"

    @given(fragments_strategy)
    def test_never_raises_and_ends_with_separator(self, fragments):
        result = reconstruct_page(fragments)
        assert result.endswith("\n\n")

    @given(fragments_strategy)
    def test_blank_fragments_never_become_tokens(self, fragments):
        body = reconstruct_page(fragments)[:-2]
        visible = [f.text for f in fragments if f.text.strip()]
        if not visible:
            assert body == ""
        else:
            assert body.endswith(visible[-1])


@pytest.mark.unit
class TestReconstructDocument:
    """Page concatenation."""

    def test_pages_concatenate_in_order(self):
        pages = [[Fragment("Page one", 700)], [Fragment("Page two", 700)]]
        assert reconstruct_document(pages) == "Page one\n\nPage two\n\n"

    def test_no_state_carries_across_pages(self):
        # Same position on the next page must not join the previous line
        pages = [[Fragment("end", 100)], [Fragment("start", 100)]]
        assert reconstruct_document(pages) == "end\n\nstart\n\n"

    @given(st.lists(fragments_strategy, max_size=8))
    def test_at_least_one_separator_per_page(self, pages):
        assert reconstruct_document(pages).count("\n\n") >= len(pages)

    def test_empty_document(self):
        assert reconstruct_document([]) == ""


@pytest.mark.unit
class TestFragmentReconstructor:
    """Options-driven reconstructor."""

    def test_uses_option_threshold(self):
        reconstructor = FragmentReconstructor(ExtractionOptions(gap_threshold=20))
        assert reconstructor.gap_threshold == 20
        assert reconstructor.reconstruct_page([Fragment("a", 100), Fragment("b", 85)]) == "a b\n\n"

    def test_default_threshold(self):
        assert FragmentReconstructor().gap_threshold == 6.0

    def test_rejects_wrong_options_class(self):
        with pytest.raises(InvalidOptionsError):
            FragmentReconstructor(LayoutOptions())

    def test_document_logs_line_counts(self, caplog):
        pages = [[Fragment("a", 100), Fragment("b", 50)], [Fragment("c", 10)]]
        with caplog.at_level(logging.DEBUG, logger="docreflow.reconstruct"):
            text = FragmentReconstructor().reconstruct_document(pages)

        assert text == "a\nb\n\nc\n\n"
        assert "Page 1: reconstructed 2 lines" in caplog.text
        assert "Page 2: reconstructed 1 lines" in caplog.text
