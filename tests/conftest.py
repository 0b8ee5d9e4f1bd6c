"""
Shared test fixtures for the double-check test suite.
"""

import json

import pytest


@pytest.fixture
def topics_original() -> str:
    """Topic list as first extracted."""
    return json.dumps([
        {"title": "A", "category": "M"},
        {"title": "B", "category": "M"},
    ])


@pytest.fixture
def topics_verified() -> str:
    """Topic list after the double-check pass accepted every change."""
    return json.dumps([
        {"title": "B", "category": "M"},
        {"title": "Z", "category": "C"},
    ])


@pytest.fixture
def topic_corrections() -> list[dict]:
    return [
        {"type": "remove", "topic": "A", "reason": "Duplicated topic"},
        {"type": "add", "topic": {"title": "Z", "category": "C"}, "reason": "Missing topic"},
    ]


@pytest.fixture
def facts_original() -> str:
    """Facts comparison with two rows and no incontroverso bucket."""
    return json.dumps({
        "tabela": [
            {
                "tema": "T",
                "alegacaoReclamante": "Worked 8h to 18h",
                "alegacaoReclamada": "Worked 8h to 17h",
                "status": "controverso",
                "relevancia": "alta",
            },
            {
                "tema": "Salário",
                "alegacaoReclamante": "R$ 3.000",
                "alegacaoReclamada": "R$ 2.500",
                "status": "controverso",
                "relevancia": "media",
            },
        ],
        "fatosControversos": ["Jornada"],
    }, ensure_ascii=False)


@pytest.fixture
def facts_corrections() -> list[dict]:
    return [
        {
            "type": "fix_row",
            "tema": "T",
            "field": "status",
            "newValue": "incontroverso",
            "reason": "Not specifically contested (Art. 341 CPC)",
        },
        {
            "type": "add_fato",
            "list": "fatosIncontroversos",
            "fato": "F",
            "reason": "Admitted by the defendant",
        },
        {"type": "remove_row", "tema": "Salário", "reason": "Out of scope"},
    ]


@pytest.fixture
def review_corrections() -> list[dict]:
    return [
        {"type": "false_positive", "item": "Missing signature", "reason": "Signature is on page 3"},
        {"type": "missed", "item": "Statute of limitations", "reason": "Not analysed"},
        {
            "type": "improve",
            "item": "Overtime reasoning",
            "suggestion": "Cite the time records",
            "reason": "Weak grounds",
        },
    ]
