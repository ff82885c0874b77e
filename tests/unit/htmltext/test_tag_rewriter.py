"""Tests for the pre-parse tag renaming."""

from htmltext.tag_rewriter import (
    A_ITEM,
    LIST_ITEM,
    ORDERED_LIST,
    PLACEHOLDER_ITEM,
    UNORDERED_LIST,
    override_tags,
)

PREFIX = f"<{PLACEHOLDER_ITEM}></{PLACEHOLDER_ITEM}>"


class TestOverrideTags:
    def test_none_gives_none(self):
        assert override_tags(None) is None

    def test_empty_string_gets_placeholder(self):
        assert override_tags("") == PREFIX

    def test_list_tags_are_renamed(self):
        result = override_tags("<ul><li>Hello world!</li></ul>")
        assert result == (
            f"{PREFIX}<{UNORDERED_LIST}><{LIST_ITEM}>Hello world!</{LIST_ITEM}></{UNORDERED_LIST}>"
        )

    def test_ordered_list_and_link(self):
        result = override_tags("<ol><li><a href='x'>go</a></li></ol>")
        assert result == (
            f"{PREFIX}<{ORDERED_LIST}><{LIST_ITEM}><{A_ITEM} href='x'>go</{A_ITEM}></{LIST_ITEM}></{ORDERED_LIST}>"
        )

    def test_attributes_are_preserved(self):
        result = override_tags('<ul class="list">')
        assert result == f'{PREFIX}<{UNORDERED_LIST} class="list">'

    def test_uppercase_tags_are_left_alone(self):
        assert override_tags("<UL><LI>x</LI></UL>") == f"{PREFIX}<UL><LI>x</LI></UL>"

    def test_prefix_matching_also_hits_longer_tags(self):
        # "<a" also prefixes "<abbr"
        result = override_tags("<abbr>x</abbr>")
        assert result == f"{PREFIX}<{A_ITEM}bbr>x</abbr>"

    def test_other_tags_untouched(self):
        assert override_tags("<p>text</p>") == f"{PREFIX}<p>text</p>"
