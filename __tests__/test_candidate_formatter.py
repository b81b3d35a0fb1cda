from sanctions_search.services.sanctions.search import CandidateFormatter

from conftest import make_hit


def test_plain_hit_has_no_formatted_name():
    candidate = CandidateFormatter().format_hit(make_hit("Ivanov, Petro", 0.91, country="nz"))

    assert candidate.model_dump(by_alias=True, exclude_none=True) == {
        "name": "Ivanov, Petro",
        "type": "individual",
        "country": "nz",
        "score": 0.91,
    }


def test_name_highlight_is_used():
    hit = make_hit("Ivanov, Petro", 0.8, formatted={"name": "<em>Ivanov</em>, Petro"})

    candidate = CandidateFormatter().format_hit(hit)

    assert candidate.name_formatted == "<em>Ivanov</em>, Petro"


def test_full_text_highlight_wins_over_name_highlight():
    hit = make_hit(
        "Alfa Group",
        0.7,
        type="entity",
        formatted={"name": "<em>Alfa</em> Group", "fts": ["<em>Alfa</em> Group LLC", "ТОВ <em>Альфа</em>"]},
    )

    candidate = CandidateFormatter().format_hit(hit)

    assert candidate.name_formatted == "<em>Alfa</em> Group LLC<br />ТОВ <em>Альфа</em>"
    assert candidate.model_dump(by_alias=True)["nameFormatted"] == candidate.name_formatted


def test_empty_full_text_highlight_falls_back_to_name():
    hit = make_hit("Alfa Group", 0.7, type="entity", formatted={"name": "<em>Alfa</em> Group", "fts": []})

    assert CandidateFormatter().format_hit(hit).name_formatted == "<em>Alfa</em> Group"
