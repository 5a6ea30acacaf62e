"""Unit tests for SDK name extraction from issue text.

Covers the marker arithmetic of the "Library used:" and artifact-id
rules, the line bound and the lazy name iterator.
"""

from src.labeler.deriver.extraction import (
    MAX_SCANNED_LINES,
    extract_artifact_id,
    extract_library_used,
    extract_sdk_name,
    iter_sdk_names,
    leading_word,
    position_after_last,
    scan_lines,
)


class TestPositionAfterLast:

    def test_points_past_last_occurrence(self):
        line = "a: x a: y"
        assert position_after_last(line, "a:") == 7

    def test_missing_marker_gives_marker_length_minus_one(self):
        assert position_after_last("nothing here", "<artifactId>") == 11
        assert position_after_last("nothing here", "Library used:") == 12


class TestLeadingWord:

    def test_cuts_at_first_space(self):
        assert leading_word("azure-core 1.2.0") == "azure-core"

    def test_whole_text_without_space(self):
        assert leading_word("azure-core") == "azure-core"

    def test_tab_is_not_a_separator(self):
        assert leading_word("azure-core\t1.2.0") == "azure-core\t1.2.0"

    def test_empty(self):
        assert leading_word("") == ""


class TestExtractLibraryUsed:

    def test_name_after_marker(self):
        assert extract_library_used("Library used: azure-core") == "azure-core"

    def test_version_is_dropped(self):
        line = "Library used: azure-core extra text"
        assert extract_library_used(line) == "azure-core"

    def test_surrounding_whitespace_is_trimmed(self):
        line = "  Library used:    azure-resourcemanager-storage   "
        assert extract_library_used(line) == "azure-resourcemanager-storage"

    def test_last_marker_wins(self):
        line = "Library used: foo Library used: azure-core"
        assert extract_library_used(line) == "azure-core"

    def test_marker_is_case_sensitive(self):
        assert extract_library_used("library used: azure-core") is None

    def test_missing_marker(self):
        assert extract_library_used("azure-core") is None

    def test_nothing_after_marker(self):
        assert extract_library_used("Library used:   ") is None


class TestExtractArtifactId:

    def test_unindented_tag(self):
        line = "<artifactId>azure-core</artifactId>"
        assert extract_artifact_id(line) == "azure-core"

    def test_unindented_tag_without_closing_tag(self):
        line = "<artifactId>azure-core"
        assert extract_artifact_id(line) == "azure-core"

    def test_indented_tag_keeps_inherited_offset(self):
        # The start offset ignores where the tag actually is.
        line = "    <artifactId>azure-core</artifactId>"
        assert extract_artifact_id(line) == "tId>azure-core"

    def test_offset_follows_library_used_marker(self):
        line = "Library used:<artifactId>azure-core</artifactId>"
        assert extract_artifact_id(line) == "<artifactId>azure-core"

    def test_missing_tag(self):
        assert extract_artifact_id("<groupId>com.azure</groupId>") is None

    def test_empty_result(self):
        assert extract_artifact_id("<artifactId></artifactId>") is None


class TestExtractSdkName:

    def test_library_used_takes_precedence(self):
        line = "Library used: azure-core <artifactId>other</artifactId>"
        assert extract_sdk_name(line) == "azure-core"

    def test_falls_back_to_artifact_id(self):
        assert extract_sdk_name("<artifactId>azure-core</artifactId>") == "azure-core"

    def test_plain_line(self):
        assert extract_sdk_name("I get an exception") is None


class TestScanLines:

    def test_none_body(self):
        assert scan_lines(None) == []

    def test_empty_body(self):
        assert scan_lines("") == []

    def test_splits_on_newline_only(self):
        assert scan_lines("a\r\nb\nc") == ["a\r", "b", "c"]

    def test_bounded_to_max_lines(self):
        body = "\n".join(str(i) for i in range(300))
        lines = scan_lines(body)
        assert len(lines) == MAX_SCANNED_LINES
        assert lines[-1] == str(MAX_SCANNED_LINES - 1)

    def test_exactly_max_lines(self):
        body = "\n".join(str(i) for i in range(MAX_SCANNED_LINES))
        assert len(scan_lines(body)) == MAX_SCANNED_LINES


class TestIterSdkNames:

    def test_names_in_line_order(self):
        body = "\n".join(
            [
                "Library used: azure-core 1.0",
                "some text",
                "<artifactId>azure-resourcemanager-compute</artifactId>",
            ]
        )
        assert list(iter_sdk_names(body)) == [
            "azure-core",
            "azure-resourcemanager-compute",
        ]

    def test_unknown_names_are_still_yielded(self):
        assert list(iter_sdk_names("Library used: left-pad")) == ["left-pad"]

    def test_marker_past_line_bound_is_ignored(self):
        lines = ["filler"] * 300
        lines[279] = "Library used: azure-core"
        assert list(iter_sdk_names("\n".join(lines))) == []
