# backend/ruleboard/rules/defaults.py
"""
Built-in seed for the rules catalog, written to disk on the first read.
"""

import copy
from typing import List

from ruleboard.rules.models import AI_AGENTS, AI_RAG, HARD_LOGIC, Rule


# ============================================================
# GENERAL BANKING
# ============================================================

GENERAL_BANKING_RULES = [
    Rule(
        id="GE-001",
        title="Cash deposits structured just below the CTR reporting thres...",
        description="Cash deposits structured just below the CTR reporting threshold across multiple days or branches.",
        indicators=["Repeated deposits between 90% and 99% of the threshold within a short window"],
        section="General Banking",
        type=HARD_LOGIC,
        risk="High",
    ),
    Rule(
        id="GE-002",
        title="Dormant account suddenly reactivated with high-value credits",
        description="Dormant account suddenly reactivated with high-value credits",
        indicators=["No activity for 12 months followed by large inward transfers"],
        section="General Banking",
        type=HARD_LOGIC,
        risk="Medium",
    ),
    Rule(
        id="GE-003",
        title="Transaction pattern inconsistent with declared profession o...",
        description="Transaction pattern inconsistent with declared profession or income of the customer.",
        indicators=["Requires comparing KYC profile text against observed behaviour"],
        section="General Banking",
        type=AI_AGENTS,
        risk="Medium",
    ),
]


# ============================================================
# CREDIT
# ============================================================

CREDIT_RULES = [
    Rule(
        id="CR-001",
        title="Loan repaid in full shortly after disbursement from unrelat...",
        description="Loan repaid in full shortly after disbursement from unrelated third-party accounts.",
        indicators=["Early settlement within 90 days", "Repayment source differs from borrower"],
        section="Credit",
        type=HARD_LOGIC,
        risk="High",
    ),
    Rule(
        id="CR-002",
        title="Collateral valuation significantly above market reference",
        description="Collateral valuation significantly above market reference",
        indicators=["Valuation report deviates from comparable assets"],
        section="Credit",
        type=AI_RAG,
        risk="Medium",
    ),
    Rule(
        id="CR-003",
        title="Loan proceeds diverted to accounts of related parties",
        description="Loan proceeds diverted to accounts of related parties",
        indicators=["Disbursed funds move to directors or affiliates within days"],
        section="Credit",
        type=AI_AGENTS,
        risk="High",
    ),
]


# ============================================================
# TRADE
# ============================================================

TRADE_RULES = [
    Rule(
        id="TR-001",
        title="Invoice unit price deviates from market price for the commo...",
        description="Invoice unit price deviates from market price for the commodity (over/under invoicing).",
        indicators=["Unit price outside tolerance of reference price list"],
        section="Trade",
        type=HARD_LOGIC,
        risk="High",
    ),
    Rule(
        id="TR-002",
        title="Shipment routed through high-risk jurisdiction without comm...",
        description="Shipment routed through high-risk jurisdiction without commercial rationale.",
        indicators=["Transshipment port on the high-risk country list", "Bill of lading narrative review"],
        section="Trade",
        type=AI_RAG,
        risk="Medium",
    ),
]


# ============================================================
# REMITTANCE
# ============================================================

REMITTANCE_RULES = [
    Rule(
        id="RE-001",
        title="Multiple inward remittances from unrelated senders to one b...",
        description="Multiple inward remittances from unrelated senders to one beneficiary within a week.",
        indicators=["More than 5 distinct senders in 7 days"],
        section="Remittance",
        type=HARD_LOGIC,
        risk="Medium",
    ),
    Rule(
        id="RE-002",
        title="Remittance purpose narrative inconsistent with beneficiary p...",
        description="Remittance purpose narrative inconsistent with beneficiary profile.",
        indicators=["Free-text purpose field compared against customer profile"],
        section="Remittance",
        type=AI_AGENTS,
        risk="Low",
    ),
]


DEFAULT_RULES: List[Rule] = GENERAL_BANKING_RULES + CREDIT_RULES + TRADE_RULES + REMITTANCE_RULES


def default_rules() -> List[Rule]:
    return copy.deepcopy(DEFAULT_RULES)
