"""Unit tests for front matter splitting."""

from datetime import date

import pytest

from quire.errors import FrontMatterNotClosedError, InvalidMetadataError
from quire.templates.frontmatter import load_metadata, split_front_matter


class TestSplitFrontMatter:
    """Tests for split_front_matter."""

    def test_splits_metadata_and_body(self) -> None:
        raw = b"---\ntitle: hello\n---\n<p>body</p>\n"

        metadata, body = split_front_matter(raw)

        assert metadata == {"title": "hello"}
        assert body == b"<p>body</p>\n"

    def test_body_is_verbatim_after_closing_line(self) -> None:
        raw = b"---\ntitle: hello\n---\n\n  indented\n\n"

        _, body = split_front_matter(raw)

        assert body == b"\n  indented\n\n"

    def test_crlf_delimiters(self) -> None:
        raw = b"---\r\ntitle: hello\r\n---\r\nbody\r\n"

        metadata, body = split_front_matter(raw)

        assert metadata == {"title": "hello"}
        assert body == b"body\r\n"

    def test_closing_delimiter_at_end_of_file(self) -> None:
        metadata, body = split_front_matter(b"---\ntitle: hello\n---")

        assert metadata == {"title": "hello"}
        assert body == b""

    def test_no_front_matter_returns_none(self) -> None:
        raw = b"<p>plain</p>\n"

        metadata, body = split_front_matter(raw)

        assert metadata is None
        assert body is raw

    def test_plus_delimiters_are_inert(self) -> None:
        raw = b"+++\ntitle: my new post\n+++\n<p>Hello World!</p>"

        metadata, body = split_front_matter(raw)

        assert metadata is None
        assert body == raw

    def test_delimiter_not_first_line_is_inert(self) -> None:
        raw = b"#+OPTIONS: toc:nil\n---\ntitle: x\n---\nbody"

        metadata, body = split_front_matter(raw)

        assert metadata is None
        assert body == raw

    def test_leading_whitespace_is_inert(self) -> None:
        raw = b" ---\ntitle: x\n---\n"

        assert split_front_matter(raw) == (None, raw)

    def test_four_dashes_are_inert(self) -> None:
        raw = b"----\ntitle: x\n----\n"

        assert split_front_matter(raw) == (None, raw)

    def test_dashes_inside_body_are_kept(self) -> None:
        raw = b"---\ntitle: x\n---\nabove\n---\nbelow\n"

        _, body = split_front_matter(raw)

        assert body == b"above\n---\nbelow\n"

    def test_unclosed_front_matter_raises(self) -> None:
        raw = b'---\ntitle: my new post\ntags: ["software", "web"]\n'

        with pytest.raises(FrontMatterNotClosedError) as exc_info:
            split_front_matter(raw)

        assert str(exc_info.value) == "front matter not closed"

    def test_indented_closing_delimiter_does_not_close(self) -> None:
        with pytest.raises(FrontMatterNotClosedError):
            split_front_matter(b"---\ntitle: x\n  ---\n")

    def test_malformed_yaml_raises(self) -> None:
        raw = b'---\ntitle\ntags: ["software", "web"]\n---\n<p>Hello World!</p>'

        with pytest.raises(InvalidMetadataError) as exc_info:
            split_front_matter(raw)

        assert "invalid yaml" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    def test_empty_block_gives_empty_metadata(self) -> None:
        metadata, body = split_front_matter(b"---\n---\nbody\n")

        assert metadata == {}
        assert body == b"body\n"


class TestLoadMetadata:
    """Tests for load_metadata type handling."""

    def test_preserves_sequence_order(self) -> None:
        metadata = load_metadata(b'tags: ["software", "web"]\n')

        assert metadata["tags"] == ["software", "web"]

    def test_preserves_scalar_types(self) -> None:
        metadata = load_metadata(
            b"title: post\ndraft: false\ncount: 3\nratio: 0.5\ndate: 2023-12-01\n"
        )

        assert metadata["title"] == "post"
        assert metadata["draft"] is False
        assert metadata["count"] == 3
        assert metadata["ratio"] == 0.5
        assert metadata["date"] == date(2023, 12, 1)

    def test_nested_mapping(self) -> None:
        metadata = load_metadata(b"author:\n  name: ada\n  links: [a, b]\n")

        assert metadata["author"] == {"name": "ada", "links": ["a", "b"]}

    def test_non_mapping_document_raises(self) -> None:
        with pytest.raises(InvalidMetadataError, match="invalid yaml: front matter must be a mapping"):
            load_metadata(b"- just\n- a list\n")

    def test_invalid_utf8_raises(self) -> None:
        with pytest.raises(InvalidMetadataError, match="invalid yaml"):
            load_metadata(b"title: \xff\xfe\n")
