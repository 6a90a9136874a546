"""View models for displaying a parsed parlay analysis."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, List

NOT_SPECIFIED = "Not specified"

_PROBABILITY = re.compile(r"probability:\s*(?:approximately\s*)?(\d+)(?:/10|\s*%)", re.IGNORECASE)


@dataclass
class SummaryView:
    sportsbook: str
    wager: str
    potential_payout: str
    total_odds: str
    has_payout: bool = False


@dataclass
class ConfidenceGrade:
    grade: str
    confidence: int


@dataclass
class OverviewView:
    risk_assessment: str
    risk_color: str
    total_legs: str
    cash_out_offer: str
    comprehensive_analysis: str
    grade: ConfidenceGrade | None = None


@dataclass
class AnalysisField:
    """One labelled node of a leg analysis; leaves carry text, branches carry children."""

    key: str
    label: str
    text: str | None = None
    children: List["AnalysisField"] = field(default_factory=list)


@dataclass
class LegView:
    event: str
    bet_type: str
    odds: str
    selection: str
    analysis_text: str | None = None
    analysis_fields: List[AnalysisField] = field(default_factory=list)


@dataclass
class AnalysisView:
    summary: SummaryView
    overview: OverviewView
    legs: List[LegView]
    citations: List[str]
    citation_lines: List[str] = field(default_factory=list)


def _present(value: Any) -> bool:
    return value is not None and value != ""


def format_money(value: Any) -> str:
    if not _present(value):
        return NOT_SPECIFIED
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"${value}"


def citation_lines(citations: List[str]) -> List[str]:
    """Numbered markdown links, or a single "Not specified" line when there are none."""

    if not citations:
        return [NOT_SPECIFIED]
    return [f"{idx}. [{url}]({url})" for idx, url in enumerate(citations, start=1)]


def _text_or(value: Any, fallback: str) -> str:
    if not value:
        return fallback
    return value if isinstance(value, str) else str(value)


def risk_color(risk: str) -> str:
    lowered = risk.lower()
    if "high" in lowered:
        return "red"
    if "medium" in lowered:
        return "amber"
    if "low" in lowered:
        return "green"
    return "blue"


def humanize_key(key: str) -> str:
    """``key_risks`` -> ``Key Risks``."""

    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def format_markdown(text: Any) -> str:
    """Turn literal ``\\n`` escapes into markdown line breaks; **bold** passes through."""

    if not isinstance(text, str):
        return json.dumps(text)
    return text.replace("\\n", "  \n")


def grade_confidence(text: str) -> ConfidenceGrade | None:
    """Derive a letter grade from a "probability: N%" or "N/10" phrase, if any."""

    match = _PROBABILITY.search(text or "")
    if not match:
        return None
    confidence = int(match.group(1))
    if "/10" in match.group(0):
        confidence *= 10
    if confidence >= 80:
        grade = "A"
    elif confidence >= 70:
        grade = "B"
    elif confidence >= 60:
        grade = "C"
    elif confidence >= 50:
        grade = "D"
    else:
        grade = "F"
    return ConfidenceGrade(grade=grade, confidence=confidence)


def build_analysis_fields(analysis: dict[str, Any]) -> List[AnalysisField]:
    """Recursively turn a nested analysis mapping into labelled fields."""

    fields: List[AnalysisField] = []
    for key, value in analysis.items():
        key = str(key)
        if key.isdigit() or not value:
            continue
        if isinstance(value, dict):
            children = build_analysis_fields(value)
            fields.append(AnalysisField(key=key, label=humanize_key(key), children=children))
        else:
            fields.append(AnalysisField(key=key, label=humanize_key(key), text=format_markdown(value)))
    return fields


def build_leg_view(leg: dict[str, Any]) -> LegView:
    view = LegView(
        event=_text_or(leg.get("event"), "Unknown Event"),
        bet_type=_text_or(leg.get("bet_type"), "Unknown Bet Type"),
        odds=_text_or(leg.get("odds"), "Odds N/A"),
        selection=_text_or(leg.get("selection"), "Not Specified"),
    )
    analysis = leg.get("analysis")
    if isinstance(analysis, dict):
        view.analysis_fields = build_analysis_fields(analysis)
    elif analysis:
        view.analysis_text = format_markdown(analysis)
    return view


def build_view(analysis: dict[str, Any]) -> AnalysisView:
    """Map a validated analysis object onto summary, overview, leg and citation views."""

    parlay = analysis.get("parlay_analysis") or {}
    risk = _text_or(parlay.get("risk_assessment"), NOT_SPECIFIED)
    comprehensive = _text_or(
        parlay.get("comprehensive_analysis"), "No comprehensive analysis available"
    )
    summary = SummaryView(
        sportsbook=_text_or(analysis.get("sportsbook"), NOT_SPECIFIED),
        wager=format_money(analysis.get("wager_amount")),
        potential_payout=format_money(analysis.get("potential_payout")),
        total_odds=_text_or(analysis.get("total_odds"), NOT_SPECIFIED),
        has_payout=_present(analysis.get("potential_payout")),
    )
    overview = OverviewView(
        risk_assessment=risk,
        risk_color=risk_color(risk),
        total_legs=_text_or(parlay.get("total_legs"), NOT_SPECIFIED),
        cash_out_offer=format_money(analysis.get("cash_out_offer")),
        comprehensive_analysis=comprehensive,
        grade=grade_confidence(comprehensive),
    )
    legs = [build_leg_view(leg) for leg in analysis.get("legs") or [] if isinstance(leg, dict)]
    raw_citations = analysis.get("citations")
    citations = [str(c) for c in raw_citations if c] if isinstance(raw_citations, list) else []
    return AnalysisView(
        summary=summary,
        overview=overview,
        legs=legs,
        citations=citations,
        citation_lines=citation_lines(citations),
    )
