"""Result view model tests."""

from __future__ import annotations

from betbuddy.rendering import view


def _analysis(**overrides) -> dict:
    base = {
        "total_odds": "+1200",
        "wager_amount": 50,
        "potential_payout": 650,
        "sportsbook": "FanDuel",
        "cash_out_offer": 75.0,
        "legs": [
            {
                "leg_id": 1,
                "event": "Lakers vs. Warriors",
                "bet_type": "Spread",
                "selection": "Lakers -3.5",
                "odds": "-110",
                "analysis": "**Lakers** have covered 4 straight.\\nInjury: none.",
            }
        ],
        "parlay_analysis": {
            "total_legs": 1,
            "risk_assessment": "High Risk - long odds",
            "comprehensive_analysis": "Estimated hit probability: 35%.",
        },
    }
    base.update(overrides)
    return base


def test_summary_formats_money_and_odds() -> None:
    result = view.build_view(_analysis())
    assert result.summary.sportsbook == "FanDuel"
    assert result.summary.wager == "$50"
    assert result.summary.potential_payout == "$650"
    assert result.summary.has_payout
    assert result.summary.total_odds == "+1200"
    assert result.overview.cash_out_offer == "$75"


def test_missing_optional_fields_render_not_specified() -> None:
    analysis = {"legs": [], "parlay_analysis": {}, "wager_amount": "", "potential_payout": None}
    result = view.build_view(analysis)
    assert result.summary.sportsbook == view.NOT_SPECIFIED
    assert result.summary.wager == view.NOT_SPECIFIED
    assert result.summary.potential_payout == view.NOT_SPECIFIED
    assert not result.summary.has_payout
    assert result.summary.total_odds == view.NOT_SPECIFIED
    assert result.overview.cash_out_offer == view.NOT_SPECIFIED
    assert result.overview.risk_assessment == view.NOT_SPECIFIED
    assert result.overview.total_legs == view.NOT_SPECIFIED
    assert result.overview.comprehensive_analysis == "No comprehensive analysis available"
    assert result.overview.grade is None
    assert result.citations == []
    assert result.citation_lines == [view.NOT_SPECIFIED]
    assert result.legs == []


def test_zero_wager_is_still_shown() -> None:
    assert view.format_money(0) == "$0"


def test_risk_colors() -> None:
    assert view.risk_color("High Risk") == "red"
    assert view.risk_color("medium risk parlay") == "amber"
    assert view.risk_color("LOW") == "green"
    assert view.risk_color("Not specified") == "blue"


def test_leg_defaults_for_missing_fields() -> None:
    leg = view.build_leg_view({})
    assert leg.event == "Unknown Event"
    assert leg.bet_type == "Unknown Bet Type"
    assert leg.odds == "Odds N/A"
    assert leg.selection == "Not Specified"
    assert leg.analysis_text is None
    assert leg.analysis_fields == []


def test_text_analysis_keeps_bold_and_breaks_lines() -> None:
    leg = view.build_view(_analysis()).legs[0]
    assert leg.analysis_text == "**Lakers** have covered 4 straight.  \nInjury: none."


def test_nested_analysis_builds_field_tree() -> None:
    leg = view.build_leg_view(
        {
            "event": "Chiefs vs. Bills",
            "analysis": {
                "current_form": "Chiefs 4-1 in last five",
                "0": "stray list index",
                "injuries": "",
                "statistical_breakdown": {
                    "key_stats": "3rd in DVOA",
                    "matchups": {"pass_rush": "Edge to Buffalo"},
                },
                "trend_count": 3,
            },
        }
    )
    keys = [node.key for node in leg.analysis_fields]
    assert keys == ["current_form", "statistical_breakdown", "trend_count"]
    form, stats, count = leg.analysis_fields
    assert form.label == "Current Form"
    assert form.text == "Chiefs 4-1 in last five"
    assert stats.text is None
    assert [child.label for child in stats.children] == ["Key Stats", "Matchups"]
    assert stats.children[1].children[0].label == "Pass Rush"
    assert stats.children[1].children[0].text == "Edge to Buffalo"
    assert count.text == "3"


def test_non_mapping_legs_are_skipped() -> None:
    result = view.build_view(_analysis(legs=["not a leg", {"event": "Real leg"}]))
    assert [leg.event for leg in result.legs] == ["Real leg"]


def test_citations_are_kept_in_order() -> None:
    urls = ["https://a.example/1", "https://b.example/2"]
    assert view.build_view(_analysis(citations=urls)).citations == urls
    assert view.build_view(_analysis(citations="https://oops.example")).citations == []


def test_humanize_key() -> None:
    assert view.humanize_key("key_risks") == "Key Risks"
    assert view.humanize_key("h2h_history") == "H2h History"


def test_grade_confidence_from_percent_and_tenths() -> None:
    grade = view.build_view(_analysis()).overview.grade
    assert grade is not None
    assert (grade.grade, grade.confidence) == ("F", 35)
    assert view.grade_confidence("Win probability: approximately 8/10").grade == "A"
    assert view.grade_confidence("probability: 72 %").grade == "B"
    assert view.grade_confidence("no numbers here") is None


def test_whole_float_amounts_drop_the_fraction() -> None:
    assert view.format_money(75.0) == "$75"
    assert view.format_money(12.5) == "$12.5"
    assert view.format_money("75.00") == "$75.00"


def test_citation_lines_are_numbered_links() -> None:
    lines = view.build_view(_analysis(citations=["https://a.example/1"])).citation_lines
    assert lines == ["1. [https://a.example/1](https://a.example/1)"]
