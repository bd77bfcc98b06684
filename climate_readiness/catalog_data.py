# --- AASB S2 readiness questionnaire ---------------------------------------------------------
#
# Static reference data in the same shape as the exported questionnaire JSON
# (camelCase keys, flat question list plus section metadata). Decoded by
# climate_readiness.services.catalog.parse_catalog.

STANDARD_URGENCY_RULES = [
    {"condition": "score<2 && weight>=8", "urgency": "High"},
    {"condition": "score<2 && weight<8", "urgency": "Medium"},
    {"condition": "score==2", "urgency": "Medium"},
    {"condition": "score>=3", "urgency": "Low"},
]

MATURITY_SCALE = [
    {"label": "0 • Not started", "score": 0},
    {"label": "1 • Initial / ad hoc", "score": 1},
    {"label": "2 • Developing", "score": 2},
    {"label": "3 • Established", "score": 3},
    {"label": "4 • Leading practice", "score": 4},
]

FREQUENCY_SCALE = [
    {"label": "0 • Never", "score": 0},
    {"label": "1 • Only when an issue arises", "score": 1},
    {"label": "2 • Annually", "score": 2},
    {"label": "3 • At least twice a year", "score": 3},
    {"label": "4 • At every scheduled board meeting", "score": 4},
]

SECTIONS = [
    {
        "id": "governance",
        "title": "Governance",
        "description": "Oversight of climate-related risks and opportunities by the board and management.",
    },
    {
        "id": "strategy",
        "title": "Strategy",
        "description": "Climate-related risks and opportunities and their effect on the business model, strategy and resilience.",
    },
    {
        "id": "risk-management",
        "title": "Risk Management",
        "description": "Processes to identify, assess, prioritise and monitor climate-related risks and opportunities.",
    },
    {
        "id": "metrics-targets",
        "title": "Metrics & Targets",
        "description": "Greenhouse gas emissions, cross-industry metrics and climate-related targets.",
    },
]

QUESTIONS = [
    # Governance
    {
        "id": "G1",
        "section": "Governance",
        "question": "Does the board, or a board committee, have documented oversight responsibility for climate-related risks and opportunities?",
        "answers": MATURITY_SCALE,
        "weight": 10,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Board oversight of climate-related risks is not formally documented in charters or terms of reference.",
        "recommendation": "Amend the board or committee charter to assign climate oversight and minute how it is exercised.",
        "relevantClause": "AASB S2 para 6(a)",
    },
    {
        "id": "G2",
        "section": "Governance",
        "question": "How often is the board informed about climate-related risks and opportunities?",
        "answers": FREQUENCY_SCALE,
        "weight": 7,
        "skipCondition": {"questionId": "G1", "minScore": 2},
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "The board is not briefed on climate matters at a regular, documented frequency.",
        "recommendation": "Add climate-related risk reporting to the standing board agenda.",
        "relevantClause": "AASB S2 para 6(a)(iii)",
    },
    {
        "id": "G3",
        "section": "Governance",
        "question": "Is management's role in assessing and managing climate-related risks assigned to specific positions or committees?",
        "answers": MATURITY_SCALE,
        "weight": 8,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "No named management position or committee owns climate-related risk.",
        "recommendation": "Designate an accountable executive and a management committee with a documented mandate.",
        "relevantClause": "AASB S2 para 6(b)",
    },
    {
        "id": "G4",
        "section": "Governance",
        "question": "Are climate-related performance metrics incorporated into executive remuneration?",
        "answers": MATURITY_SCALE,
        "weight": 4,
        "skipCondition": {"questionId": "G3", "minScore": 2},
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Executive remuneration does not reference climate-related considerations.",
        "recommendation": "Assess whether climate metrics belong in short or long term incentive plans and disclose the outcome.",
        "relevantClause": "AASB S2 para 29(g)",
    },
    # Strategy
    {
        "id": "S1",
        "section": "Strategy",
        "question": "Has the entity identified the climate-related risks and opportunities that could reasonably be expected to affect its prospects?",
        "answers": MATURITY_SCALE,
        "weight": 10,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Climate-related risks and opportunities have not been systematically identified.",
        "recommendation": "Run a risk and opportunity identification workshop across physical and transition risk categories.",
        "relevantClause": "AASB S2 para 10",
    },
    {
        "id": "S2",
        "section": "Strategy",
        "question": "Has the entity assessed the current and anticipated effects of climate-related risks on its business model and value chain?",
        "answers": MATURITY_SCALE,
        "weight": 8,
        "skipCondition": {"questionId": "S1", "minScore": 1},
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Effects on the business model and value chain are not assessed or described.",
        "recommendation": "Map identified risks to value chain stages and quantify where practicable.",
        "relevantClause": "AASB S2 para 13",
    },
    {
        "id": "S3",
        "section": "Strategy",
        "question": "Has climate-related scenario analysis been performed, including a 1.5°C-aligned scenario and a scenario of at least 2.5°C?",
        "answers": MATURITY_SCALE,
        "weight": 9,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Scenario analysis has not been performed against the required temperature pathways.",
        "recommendation": "Start with qualitative scenario narratives and build toward quantitative analysis.",
        "relevantClause": "AASB S2 para 22",
    },
    {
        "id": "S4",
        "section": "Strategy",
        "question": "Is the entity's climate resilience assessment, informed by scenario analysis, documented?",
        "answers": MATURITY_SCALE,
        "weight": 6,
        "skipCondition": {"questionId": "S3", "minScore": 2},
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "The conclusions of scenario analysis are not translated into a resilience assessment.",
        "recommendation": "Document implications for strategy, capital allocation and areas of significant uncertainty.",
        "relevantClause": "AASB S2 para 22(a)",
    },
    {
        "id": "S5",
        "section": "Strategy",
        "question": "Does the entity have a climate-related transition plan?",
        "answers": MATURITY_SCALE,
        "weight": 5,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "No transition plan, or the plan lacks key assumptions and dependencies.",
        "recommendation": "Set out planned changes to strategy and resource allocation with their key assumptions.",
        "relevantClause": "AASB S2 para 14(a)(iv)",
    },
    # Risk Management
    {
        "id": "R1",
        "section": "Risk Management",
        "question": "Are processes in place to identify, assess and prioritise climate-related risks?",
        "answers": MATURITY_SCALE,
        "weight": 9,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Climate-related risk identification and prioritisation is not a defined process.",
        "recommendation": "Define inputs, parameters and prioritisation criteria for climate-related risks.",
        "relevantClause": "AASB S2 para 25(a)",
    },
    {
        "id": "R2",
        "section": "Risk Management",
        "question": "Are climate-related risks integrated into the entity's overall risk management process?",
        "answers": MATURITY_SCALE,
        "weight": 7,
        "skipCondition": {"questionId": "R1", "minScore": 1},
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Climate-related risk is managed separately from the enterprise risk framework.",
        "recommendation": "Record climate risks in the enterprise risk register using the same rating scales.",
        "relevantClause": "AASB S2 para 25(c)",
    },
    {
        "id": "R3",
        "section": "Risk Management",
        "question": "Are climate-related opportunities identified and monitored through a defined process?",
        "answers": MATURITY_SCALE,
        "weight": 4,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Climate-related opportunities are not tracked.",
        "recommendation": "Extend the risk process to capture and monitor opportunities.",
        "relevantClause": "AASB S2 para 25(b)",
    },
    # Metrics & Targets
    {
        "id": "M1",
        "section": "Metrics & Targets",
        "question": "Are Scope 1 and Scope 2 greenhouse gas emissions measured using the GHG Protocol or NGER methodology?",
        "answers": MATURITY_SCALE,
        "weight": 10,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Scope 1 and 2 emissions are not measured on a basis that meets the standard.",
        "recommendation": "Establish an emissions inventory covering all operations within the reporting boundary.",
        "relevantClause": "AASB S2 para 29(a)(i)",
    },
    {
        "id": "M2",
        "section": "Metrics & Targets",
        "question": "Has the entity measured its Scope 3 greenhouse gas emissions across relevant categories?",
        "answers": MATURITY_SCALE,
        "weight": 8,
        "skipCondition": {"questionId": "M1", "minScore": 2},
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Scope 3 emissions have not been screened or measured.",
        "recommendation": "Screen the fifteen Scope 3 categories and prioritise data collection for material ones.",
        "relevantClause": "AASB S2 para 29(a)(vi)",
    },
    {
        "id": "M3",
        "section": "Metrics & Targets",
        "question": "Are emissions data collection, controls and documentation ready for limited assurance?",
        "answers": MATURITY_SCALE,
        "weight": 9,
        "skipCondition": {"questionId": "M1", "minScore": 2},
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Emissions data lacks the controls and audit trail an assurance provider would expect.",
        "recommendation": "Document data lineage and controls, then run a readiness review with the assurance provider.",
        "relevantClause": "ASSA 5010",
    },
    {
        "id": "M4",
        "section": "Metrics & Targets",
        "question": "Has the entity set climate-related targets and does it track progress against them?",
        "answers": MATURITY_SCALE,
        "weight": 6,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "No climate-related targets are set, or progress is not measured.",
        "recommendation": "Set targets with a base year and milestones and report performance against them.",
        "relevantClause": "AASB S2 para 33",
    },
    {
        "id": "M5",
        "section": "Metrics & Targets",
        "question": "Are industry-based metrics and any internal carbon price disclosed?",
        "answers": MATURITY_SCALE,
        "weight": 3,
        "skipCondition": None,
        "urgencyRules": STANDARD_URGENCY_RULES,
        "gapDescription": "Industry-based metrics and internal carbon pricing are not considered.",
        "recommendation": "Review the industry-based guidance for your sector and disclose applicable metrics.",
        "relevantClause": "AASB S2 para 29(f), 32",
    },
]

AASB_S2_QUESTIONNAIRE = {
    "questionnaire": QUESTIONS,
    "metadata": {
        "title": "AASB S2 Climate-related Disclosures Readiness",
        "version": "2025.1",
        "description": "Gap assessment against AASB S2 Climate-related Disclosures.",
        "sections": SECTIONS,
        "scoring": {
            "description": "Each answer records a maturity level from 0 (not started) to 4 (leading practice).",
            "levels": [
                {"score": 0, "description": "Not started"},
                {"score": 1, "description": "Initial / ad hoc"},
                {"score": 2, "description": "Developing"},
                {"score": 3, "description": "Established"},
                {"score": 4, "description": "Leading practice"},
            ],
        },
        "urgency": {
            "description": "How pressing the gap implied by an answer is.",
            "levels": [
                {"level": "High", "description": "Address before the first reporting period."},
                {"level": "Medium", "description": "Address within the first reporting period."},
                {"level": "Low", "description": "Refine as part of continuous improvement."},
            ],
        },
    },
}
