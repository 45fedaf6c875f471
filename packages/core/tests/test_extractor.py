"""Tests for heuristic analysis extraction."""

from devmentor_core.extractor import (
    ERROR_HANDLING_EXAMPLE,
    SECURITY_ISSUE_MESSAGE,
    extract,
)
from devmentor_core.models import Analysis


class TestDefaults:
    def test_unrecognizable_text_yields_default_analysis(self):
        analysis = extract("Looks fine to me.")
        assert analysis == Analysis()
        assert analysis.overall_score == 7.0
        assert analysis.complexity == "medium"
        assert analysis.maintainability == 75
        assert analysis.performance == 80
        assert analysis.security == 70
        assert analysis.issues == []
        assert analysis.suggestions == []

    def test_empty_text_yields_default_analysis(self):
        assert extract("") == Analysis()

    def test_defaults_are_flagged_low_confidence(self):
        assert extract("Looks fine to me.").low_confidence is True

    def test_any_signal_clears_low_confidence(self):
        assert extract("Overall 8/10").low_confidence is False

    def test_extraction_is_deterministic(self):
        text = "Score: 6/10. Complex logic, security vulnerability, add error handling."
        assert extract(text) == extract(text)

    def test_results_do_not_share_lists(self):
        first = extract("security vulnerability")
        second = extract("nothing here")
        assert second.issues == []
        assert len(first.issues) == 1


class TestScore:
    def test_slash_ten(self):
        assert extract("I would give this 8/10").overall_score == 8.0

    def test_decimal_with_spaces(self):
        assert extract("Quality: 8.5 / 10 overall").overall_score == 8.5

    def test_score_keyword(self):
        assert extract("Score: 9").overall_score == 9.0

    def test_rate_keyword(self):
        assert extract("I rate it a solid 6 out of ten").overall_score == 6.0

    def test_case_insensitive(self):
        assert extract("SCORE 4").overall_score == 4.0

    def test_first_match_wins(self):
        assert extract("Before: 3/10. After fixes: 9/10.").overall_score == 3.0

    def test_out_of_range_keeps_default(self):
        assert extract("Score: 42").overall_score == 7.0

    def test_zero_keeps_default(self):
        assert extract("0/10 would not merge").overall_score == 7.0

    def test_out_of_range_first_match_is_not_replaced_by_later_match(self):
        assert extract("score 55 points, final 8/10").overall_score == 7.0


class TestComplexity:
    def test_high_complexity(self):
        assert extract("This has high complexity.").complexity == "high"

    def test_complex_substring(self):
        assert extract("The nested loops are complex").complexity == "high"

    def test_simple_is_low(self):
        assert extract("A simple and readable function").complexity == "low"

    def test_high_wins_over_low(self):
        assert extract("Parts are simple but overall high complexity").complexity == "high"

    def test_case_insensitive(self):
        assert extract("SIMPLE code").complexity == "low"

    def test_no_signal_is_medium(self):
        assert extract("Score: 8/10").complexity == "medium"


class TestSecurity:
    def test_security_vulnerability_adds_issue_and_lowers_score(self):
        analysis = extract("There is a security vulnerability in the SQL query.")
        security_issues = [i for i in analysis.issues if i.type == "security"]
        assert len(security_issues) == 1
        assert security_issues[0].severity == "medium"
        assert security_issues[0].line == 1
        assert security_issues[0].message == SECURITY_ISSUE_MESSAGE
        assert security_issues[0].suggestion
        assert analysis.security == 60

    def test_repeated_mentions_add_one_issue(self):
        analysis = extract("Security issue one. Another security issue. A vulnerability too.")
        assert len([i for i in analysis.issues if i.type == "security"]) == 1
        assert analysis.security == 60

    def test_negated_mention_is_ignored(self):
        analysis = extract("Score: 9/10. No security concerns.")
        assert analysis.security == 70
        assert analysis.issues == []

    def test_zero_day_vulnerability_is_not_negated(self):
        analysis = extract("This endpoint has a zero-day vulnerability in the parser.")
        assert analysis.security == 60
        assert [i.type for i in analysis.issues] == ["security"]

    def test_negated_then_real_mention_counts(self):
        analysis = extract("No security concerns in parsing. However the login has a vulnerability.")
        assert analysis.security == 60


class TestPerformance:
    def test_performance_adds_low_issue(self):
        analysis = extract("Performance could be better with a set lookup.")
        perf = [i for i in analysis.issues if i.type == "performance"]
        assert len(perf) == 1
        assert perf[0].severity == "low"
        assert analysis.performance == 70

    def test_optimization_keyword(self):
        assert extract("Consider an optimization of the loop").performance == 70

    def test_security_issue_precedes_performance_issue(self):
        analysis = extract("Security risk and performance problem")
        assert [i.type for i in analysis.issues] == ["security", "performance"]

    def test_negated_performance_ignored(self):
        analysis = extract("There are no performance problems here")
        assert analysis.performance == 80


class TestSuggestions:
    def test_error_handling_adds_best_practice(self):
        analysis = extract("Add proper error handling around the file read.")
        best = [s for s in analysis.suggestions if s.type == "best-practice"]
        assert len(best) == 1
        assert best[0].code_example == ERROR_HANDLING_EXAMPLE

    def test_type_and_script_adds_static_typing_improvement(self):
        analysis = extract("Migrating this JavaScript to TypeScript would help.")
        improvements = [s for s in analysis.suggestions if s.type == "improvement"]
        assert len(improvements) == 1
        assert "type safety" in improvements[0].message

    def test_type_without_script_adds_nothing(self):
        assert extract("The return type is unclear").suggestions == []

    def test_suggestion_order(self):
        analysis = extract("Better error handling; also consider TypeScript")
        assert [s.type for s in analysis.suggestions] == ["best-practice", "improvement"]
