"""
Prompt text for the two model calls.

- The vision prompt asks for a fixed JSON summary or a bare sentinel
- The narrative prompt embeds that summary and suggests an output shape
"""
from __future__ import annotations

import json
from typing import Any

INVALID_BET_SLIP_SENTINEL = "INVALID BET SLIP"

VISION_INSTRUCTIONS = f"""You are an expert betting analyst reviewing bet slips submitted by customers.
Return a summary of the bet slip as a JSON object.
Before doing any analysis, check the image and MAKE SURE it is a bet slip.
If you cannot determine with certainty that it is a valid bet slip, stop and return exactly
"{INVALID_BET_SLIP_SENTINEL}". Never describe what is in the image when it is not a bet slip.
List every leg under "legs" with its "event", "bet_type", "selection" and "odds".
Finish the JSON object with these fields, as in this example:
  "type": "Parlay",
  "description": "3 Pick Parlay",
  "parlayOdds": +516,
  "stakeAmount": "Not specified",
  "platform": "DraftKings\""""

NARRATIVE_EXAMPLE: dict[str, Any] = {
    "total_odds": "+1200",
    "wager_amount": 50,
    "potential_payout": 650,
    "legs": [
        {
            "leg_id": 1,
            "event": "Los Angeles Lakers vs. Golden State Warriors",
            "bet_type": "Spread",
            "selection": "Lakers -3.5",
            "odds": "-110",
            "result": "Pending",
            "analysis": "(Analysis for this leg only, not the whole slip.)",
        },
        {
            "leg_id": 2,
            "event": "Kansas City Chiefs vs. Buffalo Bills",
            "bet_type": "Moneyline",
            "selection": "Chiefs ML",
            "odds": "+150",
            "result": "Win",
            "analysis": "(Analysis for this leg only, not the whole slip.)",
        },
    ],
    "parlay_analysis": {
        "total_legs": 2,
        "pending_legs": 1,
        "won_legs": 1,
        "lost_legs": 0,
        "risk_assessment": "Medium Risk - 2 leg parlay with mixed odds",
        "comprehensive_analysis": (
            "Overall view of the entire slip. Describe it; do not give the user advice "
            "on what to do."
        ),
    },
    "sportsbook": "FanDuel",
    "cash_out_offer": 75.00,
}

NARRATIVE_INSTRUCTIONS = """You are an expert betting analyst with extensive experience in sports analytics.
Analyze the bet slip described by the JSON data below. Use the web to find current, relevant
sources for every leg.

For each leg cover:
1. Game/match context: current form, recent head-to-head results, injuries and availability,
   weather where relevant, home/away splits, schedule difficulty and fatigue.
2. Statistics: numbers that matter for this bet type, league-wide trends, key matchup edges.
3. External factors: travel, rest days, venue, officiating, public betting and line movement.
Give the primary factors supporting the bet and the key risk factors.

Finish with an assessment of the whole parlay and its risk.

Return the analysis as a JSON object shaped like the example below. Use only the fields you have
data for. The example is NOT a real bet slip; never copy its values. Anything else worth adding
belongs in "analysis" (per leg) or "comprehensive_analysis" (whole slip)."""


def narrative_prompt(extraction: dict[str, Any]) -> str:
    """Return the narrative request with the extracted slip embedded."""

    example = json.dumps(NARRATIVE_EXAMPLE, indent=2)
    slip = json.dumps(extraction, indent=2)
    return (
        f"{NARRATIVE_INSTRUCTIONS}\n\n<EXAMPLE>\n{example}\n</EXAMPLE>\n\n"
        "Return the JSON object strictly in the format of the example and nothing else.\n\n"
        f"Here's the bet slip data: {slip}"
    )
