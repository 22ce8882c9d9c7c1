"""Tests for content type classification."""

import pytest

from clipseg.classifier import classify
from clipseg.models import ContentType


class TestClassify:
    """Tests for the classify function."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", ContentType.UNKNOWN),
            ("12345 !!!", ContentType.UNKNOWN),
            ("see https://example.com/page", ContentType.URL),
            ("1. First item\n2. Second item", ContentType.LIST),
            ("intro\n- bullet", ContentType.LIST),
            ("一、第一项", ContentType.LIST),
            ("① 第一", ContentType.LIST),
            ("getUserName", ContentType.CODE),
            ("HTTPRequest", ContentType.CODE),
            ("user_name", ContentType.CODE),
            ("main-content", ContentType.CODE),
            ("他说“你好”", ContentType.WRAPPED),
            ("call me (maybe)", ContentType.WRAPPED),
            ("我喜欢 python", ContentType.MIXED),
            ("今天天气很好", ContentType.CHINESE),
            ("Hello world. This is a test!", ContentType.ENGLISH),
        ],
    )
    def test_rules(self, text, expected):
        """Each rule produces its content type."""
        assert classify(text) == expected

    def test_url_before_list(self):
        """A URL inside a list still classifies as url."""
        assert classify("1. https://example.com\n2. other") == ContentType.URL

    def test_list_before_code(self):
        """List markers win over identifiers."""
        assert classify("- getUserName\n- user_id") == ContentType.LIST

    def test_single_letter_marker(self):
        """A single letter with a period and a space is a marker; a word is not."""
        assert classify("A. Smith went home") == ContentType.LIST
        assert classify("Anna went home.") == ContentType.ENGLISH

    def test_deterministic(self):
        """Classification is a pure function of the text."""
        text = "混合 text with 中文"
        assert classify(text) == classify(text) == ContentType.MIXED

    def test_non_string(self):
        """Non-string input is unknown."""
        assert classify(None) == ContentType.UNKNOWN
