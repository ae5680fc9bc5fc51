"""Tests for rule compilation and the pattern/literal match functions."""

import pytest

from src.uafacets.classifier.matchers import (
    LiteralRule,
    PatternRule,
    RuleMatch,
    compile_rule,
    compile_rules,
    match_literal,
    match_pattern,
    match_rule,
)
from src.uafacets.exceptions import RuleCompilationError
from src.uafacets.rules.descriptor import RuleDescriptor


def pattern_rule(expand_templates: bool = False, **kwargs) -> PatternRule:
    return compile_rule(RuleDescriptor(**kwargs), 0, expand_templates)


def literal_rule(**kwargs) -> LiteralRule:
    return compile_rule(RuleDescriptor(**kwargs), 0)


class TestCompileRule:
    """Test suite for compile_rule / compile_rules."""

    def test_regex_compiles_to_pattern_rule(self):
        rule = pattern_rule(regex=r"(Chrome)/(\d+)")
        assert isinstance(rule, PatternRule)
        assert rule.pattern.pattern == r"(Chrome)/(\d+)"

    def test_names_compile_to_literal_rule(self):
        rule = literal_rule(names="Opera | OPR", require="A,b", exclude="C")
        assert isinstance(rule, LiteralRule)
        assert rule.names == ("opera", "opr")
        assert rule.require == ("a", "b")
        assert rule.exclude == ("c",)
        assert rule.version_separator == "/"

    def test_explicit_empty_separator_kept(self):
        rule = literal_rule(names="foo", version_separator="")
        assert rule.version_separator == ""

    def test_regex_takes_precedence_over_names(self):
        rule = compile_rule(RuleDescriptor(regex="x", names="y"), 0)
        assert isinstance(rule, PatternRule)

    def test_missing_regex_and_names_raises(self):
        with pytest.raises(RuleCompilationError) as exc_info:
            compile_rule(RuleDescriptor(family_replacement="X"), 4)

        assert exc_info.value.index == 4
        assert exc_info.value.descriptor.family_replacement == "X"
        assert "missing regex or names" in str(exc_info.value)

    def test_blank_name_list_raises(self):
        with pytest.raises(RuleCompilationError):
            compile_rule(RuleDescriptor(names=" | "), 0)

    def test_invalid_regex_raises(self):
        with pytest.raises(RuleCompilationError) as exc_info:
            compile_rule(RuleDescriptor(regex="(unclosed"), 2)
        assert exc_info.value.index == 2

    def test_compile_rules_reports_offending_index(self):
        descriptors = [
            RuleDescriptor(regex="a"),
            RuleDescriptor(names="b"),
            RuleDescriptor(),
        ]
        with pytest.raises(RuleCompilationError) as exc_info:
            compile_rules(descriptors)
        assert exc_info.value.index == 2

    def test_error_names_section(self):
        with pytest.raises(RuleCompilationError) as exc_info:
            compile_rules([RuleDescriptor(regex="a"), RuleDescriptor()], section="os_parsers")

        assert exc_info.value.section == "os_parsers"
        assert "os_parsers rule #1" in str(exc_info.value)

    def test_compile_rules_preserves_order(self):
        rules = compile_rules([RuleDescriptor(names="b"), RuleDescriptor(regex="a")])
        assert isinstance(rules[0], LiteralRule)
        assert isinstance(rules[1], PatternRule)

    def test_regex_flag_i_is_case_insensitive(self):
        rule = pattern_rule(regex="(pixel \\d)", regex_flag="i", expand_templates=True)
        assert match_pattern(rule, "Android; Pixel 7)").family == "Pixel 7"


class TestMatchPattern:
    """Test suite for pattern rules."""

    def test_no_match_returns_none(self):
        rule = pattern_rule(regex=r"(Firefox)/(\d+)")
        assert match_pattern(rule, "Chrome/120") is None

    def test_groups_fill_family_and_versions(self):
        rule = pattern_rule(regex=r"^(Mozilla)/(\d+)\.(\d+)")
        result = match_pattern(rule, "Mozilla/5.0 (X11; Linux x86_64)")

        assert result.family == "Mozilla"
        assert result.v1 == "5"
        assert result.v2 == "0"
        assert result.v3 is None

    def test_find_is_not_anchored(self):
        rule = pattern_rule(regex=r"(Chrome)/(\d+)")
        result = match_pattern(rule, "Mozilla/5.0 AppleWebKit Chrome/120 Safari")
        assert result.family == "Chrome"
        assert result.v1 == "120"

    def test_family_replacement_substitutes_group_1(self):
        rule = pattern_rule(regex=r"(Chrome)/(\d+)", family_replacement="$1 Mobile")
        assert match_pattern(rule, "Chrome/99").family == "Chrome Mobile"

    def test_family_replacement_without_token_used_verbatim(self):
        rule = pattern_rule(regex=r"(CriOS)/(\d+)", family_replacement="Chrome Mobile iOS")
        result = match_pattern(rule, "CriOS/120")
        assert result.family == "Chrome Mobile iOS"
        assert result.v1 == "120"

    def test_family_replacement_kept_when_group_1_absent(self):
        rule = pattern_rule(regex=r"(?:(Foo)|Bar)/(\d+)", family_replacement="$1 Browser")
        result = match_pattern(rule, "Bar/3")
        assert result.family == "$1 Browser"
        assert result.v1 == "3"

    def test_no_family_voids_the_rule(self):
        rule = pattern_rule(regex=r"Safari/\d+")
        assert match_pattern(rule, "Safari/604") is None

    def test_non_participating_group_1_voids_the_rule(self):
        rule = pattern_rule(regex=r"(?:(Foo)|Bar)")
        assert match_pattern(rule, "Bar") is None

    def test_non_participating_version_group_is_none(self):
        rule = pattern_rule(regex=r"(Firefox)(?:/(\d+)|)")
        result = match_pattern(rule, "Firefox")
        assert result.family == "Firefox"
        assert result.v1 is None

    def test_version_replacements(self):
        rule = pattern_rule(
            regex=r"(Edg)/(\d+)\.(\d+)",
            v1_replacement="7",
        )
        result = match_pattern(rule, "Edg/120.5")
        assert result.v1 == "7"
        assert result.v2 == "5"

    def test_v2_replacement_suppresses_patch_group(self):
        rule = pattern_rule(regex=r"(A)/(\d+)\.(\d+)\.(\d+)", v2_replacement="x")
        result = match_pattern(rule, "A/1.2.3")
        assert result.v1 == "1"
        assert result.v2 == "x"
        assert result.v3 is None

    def test_patch_from_group_4(self):
        rule = pattern_rule(regex=r"(A)/(\d+)\.(\d+)\.(\d+)")
        result = match_pattern(rule, "A/1.2.3")
        assert (result.v1, result.v2, result.v3) == ("1", "2", "3")

    def test_patch_minor_from_group_5(self):
        rule = pattern_rule(regex=r"(Win) (\d+)\.(\d+)\.(\d+)\.(\d+)")
        result = match_pattern(rule, "Win 10.0.1.22")
        assert result.v4 == "22"

    def test_v3_and_v4_replacements(self):
        rule = pattern_rule(
            regex=r"(Windows NT) 10",
            family_replacement="Windows",
            v1_replacement="10",
            v3_replacement="p",
            v4_replacement="q",
        )
        result = match_pattern(rule, "Windows NT 10")
        assert result == RuleMatch(family="Windows", v1="10", v3="p", v4="q")

    def test_no_case_normalization(self):
        rule = pattern_rule(regex=r"(chrome)/(\d+)")
        assert match_pattern(rule, "Chrome/120") is None

    def test_device_templates(self):
        rule = pattern_rule(
            expand_templates=True,
            regex=r"; *(SM-[A-Z0-9]+)",
            family_replacement="Samsung $1",
            brand_replacement="Samsung",
            model_replacement="$1",
        )
        result = match_pattern(rule, "Linux; Android 13; SM-G991B) AppleWebKit")

        assert result.family == "Samsung SM-G991B"
        assert result.brand == "Samsung"
        assert result.model == "SM-G991B"

    def test_device_template_missing_group_is_blank(self):
        rule = pattern_rule(
            expand_templates=True,
            regex=r"(Kindle)",
            family_replacement="$2 Reader",
            brand_replacement="$3",
        )
        result = match_pattern(rule, "Kindle/3.0")

        assert result.family == "Reader"
        assert result.brand is None
        assert result.model == "Kindle"

    def test_device_without_replacements_uses_group_1(self):
        rule = pattern_rule(expand_templates=True, regex=r"; *(Pixel \d+)")
        result = match_pattern(rule, "Android 14; Pixel 8)")
        assert result.family == "Pixel 8"
        assert result.model == "Pixel 8"
        assert result.brand is None


class TestMatchLiteral:
    """Test suite for literal rules."""

    def test_opera_version(self):
        rule = literal_rule(names="opera", family_replacement="Opera")
        result = match_literal(rule, "Opera/9.80 (Windows NT 6.1; U; en) Presto/2.10")

        assert result.family == "Opera"
        assert result.v1 == "9"
        assert result.v2 == "80"
        assert result.v3 is None

    def test_case_insensitive(self):
        rule = literal_rule(names="Firefox", family_replacement="Firefox")
        result = match_literal(rule, "Mozilla/5.0 FIREFOX/121.0")
        assert result.family == "Firefox"
        assert result.v1 == "121"

    def test_no_name_contained(self):
        rule = literal_rule(names="opera", family_replacement="Opera")
        assert match_literal(rule, "Chrome/120") is None

    def test_empty_input(self):
        rule = literal_rule(names="opera", family_replacement="Opera")
        assert match_literal(rule, "") is None

    def test_more_than_three_components_truncated(self):
        rule = literal_rule(names="chrome", family_replacement="Chrome")
        result = match_literal(rule, "Chrome/120.0.6099.109 Safari/537.36")
        assert (result.v1, result.v2, result.v3) == ("120", "0", "6099")

    @pytest.mark.parametrize(
        "agent_string",
        [
            "foo/1.2 bar",
            "foo/1.2;bar",
            "foo/1.2/bar",
            "foo/1.2,bar",
            "(foo/1.2)",
            "foo/1.2",
        ],
    )
    def test_version_ends_at_delimiter(self, agent_string):
        rule = literal_rule(names="foo", family_replacement="Foo")
        result = match_literal(rule, agent_string)
        assert (result.v1, result.v2, result.v3) == ("1", "2", None)

    def test_components_are_trimmed(self):
        rule = literal_rule(names="foo", family_replacement="Foo")
        result = match_literal(rule, "foo/1.\t2")
        assert (result.v1, result.v2) == ("1", "2")

    def test_space_after_separator_gives_empty_major(self):
        rule = literal_rule(names="foo", family_replacement="Foo")
        result = match_literal(rule, "foo/ 1")
        assert result.v1 == ""
        assert result.v2 is None

    def test_custom_separator(self):
        rule = literal_rule(names="msie", family_replacement="IE", version_separator=" ")
        result = match_literal(rule, "Mozilla/4.0 (compatible; MSIE 10.0; Windows NT 6.1)")
        assert result.family == "IE"
        assert (result.v1, result.v2) == ("10", "0")

    def test_empty_separator_disables_versions(self):
        rule = literal_rule(names="opera", family_replacement="Opera", version_separator="")
        assert match_literal(rule, "Opera/9.80") == RuleMatch(family="Opera")

    def test_separator_not_found_reports_family_only(self):
        rule = literal_rule(names="opera", family_replacement="Opera")
        assert match_literal(rule, "Opera 9.80") == RuleMatch(family="Opera")

    def test_first_configured_name_wins(self):
        rule = literal_rule(names="beta|alpha", family_replacement="X")
        result = match_literal(rule, "alpha/1 beta/2")
        assert result.v1 == "2"

    def test_missing_require_voids_rule(self):
        rule = literal_rule(names="version|safari", require="mobile", family_replacement="Mobile Safari")
        assert match_literal(rule, "Version/17.0 Safari/605") is None

    def test_all_required_present(self):
        rule = literal_rule(names="version", require="safari,mobile", family_replacement="Mobile Safari")
        result = match_literal(rule, "Version/17.1 Mobile/15E148 Safari/604.1")
        assert result.family == "Mobile Safari"
        assert (result.v1, result.v2) == ("17", "1")

    def test_require_keeps_surrounding_whitespace(self):
        rule = literal_rule(names="safari", require=" mobile", family_replacement="S")

        assert rule.require == (" mobile",)
        assert match_literal(rule, "Safari/1 xmobile") is None
        assert match_literal(rule, "Safari/1 Mobile").family == "S"

    def test_exclude_keeps_surrounding_whitespace(self):
        rule = literal_rule(names="firefox", exclude="zz, seamonkey", family_replacement="Firefox")

        assert rule.exclude == ("zz", " seamonkey")
        assert match_literal(rule, "Firefox/91.0 (SeaMonkey)").family == "Firefox"
        assert match_literal(rule, "Firefox/91.0 SeaMonkey/2.53") is None

    def test_excluded_literal_voids_rule(self):
        rule = literal_rule(names="firefox", exclude="seamonkey", family_replacement="Firefox")
        assert match_literal(rule, "Firefox/91.0 SeaMonkey/2.53") is None

    def test_spider_version_is_matched_name(self):
        rule = literal_rule(names="googlebot|bingbot", family_replacement="spider")
        result = match_literal(rule, "Mozilla/5.0 (compatible; bingbot/2.0)")

        assert result.family == "spider"
        assert result.v1 == "bingbot"
        assert result.v2 is None

    def test_spider_token_is_case_insensitive(self):
        rule = literal_rule(names="slurp", family_replacement="Spider")
        result = match_literal(rule, "Yahoo! Slurp")
        assert result == RuleMatch(family="Spider", v1="slurp")

    def test_family_defaults_to_matched_name(self):
        rule = literal_rule(names="curl")
        result = match_literal(rule, "curl/8.4.0")
        assert result.family == "curl"
        assert (result.v1, result.v2, result.v3) == ("8", "4", "0")


class TestMatchRule:
    """Test dispatch over the rule variants."""

    def test_dispatches_pattern(self):
        rule = pattern_rule(regex=r"(Chrome)/(\d+)")
        assert match_rule(rule, "Chrome/1").family == "Chrome"

    def test_dispatches_literal(self):
        rule = literal_rule(names="chrome", family_replacement="Chrome")
        assert match_rule(rule, "Chrome/1").family == "Chrome"
