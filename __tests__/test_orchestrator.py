import asyncio

import pytest

from sanctions_search.core.exceptions import UpstreamServiceError, ValidationError
from sanctions_search.schemas.search_schemas import (
    Jurisdiction,
    SearchFilterRequest,
    SearchRequest,
)
from sanctions_search.services.sanctions import SanctionsOrchestrator

from conftest import FailingTranslator, FakeSearchClient, FakeTranslator, make_hit

AU = Jurisdiction.AU
NZ = Jurisdiction.NZ


def smart_request(q, type):
    return SearchRequest(q=q, filter=SearchFilterRequest(type=type))


def test_entity_groups_follow_input_order_not_completion_order(test_settings):
    client = FakeSearchClient(
        hits={
            ("Smith", AU): [make_hit("Smith Holdings", 0.9, type="entity")],
            ("Jones", NZ): [make_hit("Jones Ltd", 0.6, type="entity", country="nz")],
            ("Lee", AU): [make_hit("Lee Trading", 0.7, type="entity")],
        },
        delays={("Smith", AU): 0.3, ("Smith", NZ): 0.3, ("Jones", AU): 0.1, ("Jones", NZ): 0.1},
    )
    service = SanctionsOrchestrator(client, FakeTranslator(), test_settings)

    groups = asyncio.run(service.smart_search(smart_request("Smith\nJones\nLee", "entity")))

    assert [group.q for group in groups] == ["Smith", "Jones", "Lee"]
    assert [[c.name for c in group.candidates] for group in groups] == [
        ["Smith Holdings"], ["Jones Ltd"], ["Lee Trading"],
    ]
    assert {call["index"] for call in client.calls} == {"entities"}
    assert {call["limit"] for call in client.calls} == {5}


def test_entity_lines_are_cleaned_before_search(test_settings):
    client = FakeSearchClient()
    translator = FakeTranslator()
    service = SanctionsOrchestrator(client, translator, test_settings)

    groups = asyncio.run(service.search_entities('  ТОВ "Альфа-Груп"  \n\n'))

    assert len(groups) == 1
    assert groups[0].q == 'ТОВ "Альфа-Груп"'
    assert groups[0].x == "ТОВ Альфа Груп"
    assert {call["query"] for call in client.calls} == {"ТОВ Альфа Груп"}
    assert {call["ranking_score_threshold"] for call in client.calls} == {None}
    assert translator.calls == []


def test_individual_pipeline_translates_once_and_transliterates(test_settings):
    client = FakeSearchClient(hits={
        ("Ivanov Petr", AU): [make_hit("IVANOV, Petr", 0.93)],
        ("Ivanov Petr", NZ): [make_hit("IVANOV, Pyotr", 0.95, country="nz")],
        ("Shevchenko Olga", AU): [make_hit("SHEVCHENKO, Olga", 0.6)],
    })
    translator = FakeTranslator(answers={
        "Іванов Петро\nШевченко Ольга": "Иванов Петр\nШевченко Ольга",
    })
    service = SanctionsOrchestrator(client, translator, test_settings)

    groups = asyncio.run(service.smart_search(smart_request("Іванов Петро\nШевченко Ольга", "individual")))

    assert translator.calls == [("Іванов Петро\nШевченко Ольга", "ru")]
    assert [(group.q, group.x) for group in groups] == [
        ("Іванов Петро", "Ivanov Petr"),
        ("Шевченко Ольга", "Shevchenko Olga"),
    ]
    assert [c.score for c in groups[0].candidates] == [0.95, 0.93]
    assert {call["ranking_score_threshold"] for call in client.calls} == {0.5}
    assert {call["index"] for call in client.calls} == {"sanctions"}
    assert all(group.error is None for group in groups)


def test_individual_pipeline_with_no_translation_returns_empty(test_settings):
    client = FakeSearchClient()
    service = SanctionsOrchestrator(client, FakeTranslator(default=None), test_settings)

    groups = asyncio.run(service.smart_search(smart_request("Іванов Петро", "individual")))

    assert groups == []
    assert client.calls == []


def test_line_count_mismatch_translates_each_line(test_settings):
    translator = FakeTranslator(answers={
        "Іванов\nПетренко": "Иванов Петренко",
        "Іванов": "Иванов",
        "Петренко": "Петренко",
    })
    client = FakeSearchClient()
    service = SanctionsOrchestrator(client, translator, test_settings)

    groups = asyncio.run(service.search_individuals("Іванов\nПетренко"))

    assert [(group.q, group.x) for group in groups] == [("Іванов", "Ivanov"), ("Петренко", "Petrenko")]
    assert translator.calls[0] == ("Іванов\nПетренко", "ru")
    assert sorted(call[0] for call in translator.calls[1:]) == ["Іванов", "Петренко"]


def test_blank_query_makes_no_calls(test_settings):
    client = FakeSearchClient()
    translator = FakeTranslator()
    service = SanctionsOrchestrator(client, translator, test_settings)

    assert asyncio.run(service.direct_search(SearchRequest(q="   "))) == []
    assert asyncio.run(service.smart_search(SearchRequest(q=" \n \n"))) == []
    assert client.calls == []
    assert translator.calls == []


def test_smart_search_requires_type_before_any_call(test_settings):
    client = FakeSearchClient()
    translator = FakeTranslator()
    service = SanctionsOrchestrator(client, translator, test_settings)

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.smart_search(SearchRequest(q="Smith")))

    assert exc_info.value.message == "invalid filter type"
    assert client.calls == []
    assert translator.calls == []


def test_too_long_query_is_rejected_before_filter_checks(test_settings):
    service = SanctionsOrchestrator(FakeSearchClient(), FakeTranslator(), test_settings)
    request = SearchRequest(q="x" * 101, filter=SearchFilterRequest(type="vessel"))

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.direct_search(request))

    assert exc_info.value.message == "query is too long"


def test_direct_search_applies_filter_and_clamped_limit(test_settings):
    client = FakeSearchClient(hits={
        ("Ivanov", NZ): [make_hit(f"Ivanov {i}", 0.9 - i / 100, country="nz") for i in range(12)],
    })
    service = SanctionsOrchestrator(client, FakeTranslator(), test_settings)
    request = SearchRequest(q=" Ivanov ", filter=SearchFilterRequest(country="nz"), limit=50)

    candidates = asyncio.run(service.direct_search(request))

    assert len(candidates) == 10
    assert client.calls[0]["query"] == "Ivanov"
    assert client.calls[0]["filter"].to_expression() == "country = nz"
    assert client.calls[0]["ranking_score_threshold"] is None


def test_partition_failure_marks_only_that_line(test_settings):
    client = FakeSearchClient(
        hits={("Lee", NZ): [make_hit("Lee Trading", 0.7, type="entity", country="nz")]},
        failures={("Smith", AU), ("Lee", AU)},
    )
    service = SanctionsOrchestrator(client, FakeTranslator(), test_settings)

    groups = asyncio.run(service.search_entities("Smith\nJones\nLee"))

    assert [group.error for group in groups] == [
        "search failed for partition(s): au", None, "search failed for partition(s): au",
    ]
    assert [c.name for c in groups[2].candidates] == ["Lee Trading"]


def test_fail_fast_fails_the_whole_request(test_settings):
    test_settings.smart_search_fail_fast = True
    client = FakeSearchClient(failures={("Jones", NZ)})
    service = SanctionsOrchestrator(client, FakeTranslator(), test_settings)

    with pytest.raises(UpstreamServiceError):
        asyncio.run(service.search_entities("Smith\nJones"))


def test_unknown_transliteration_scheme_fails_at_construction(test_settings):
    test_settings.transliteration_scheme = "gost_7_79"

    with pytest.raises(ValueError):
        SanctionsOrchestrator(FakeSearchClient(), FakeTranslator(), test_settings)


def test_translation_failure_fails_individual_search_before_any_search(test_settings):
    client = FakeSearchClient()
    translator = FailingTranslator()
    service = SanctionsOrchestrator(client, translator, test_settings)

    with pytest.raises(UpstreamServiceError) as exc_info:
        asyncio.run(service.smart_search(smart_request("Іванов Петро\nШевченко Ольга", "individual")))

    assert exc_info.value.service == "translate"
    assert translator.calls == [("Іванов Петро\nШевченко Ольга", "ru")]
    assert client.calls == []
