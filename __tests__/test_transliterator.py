import pytest

from sanctions_search.services.sanctions.language import get_scheme, transliterate


def test_icao_romanises_russian_names():
    assert transliterate("Хрущёв") == "Khrushchev"
    assert transliterate("Юлия Тимошенко") == "Iuliia Timoshenko"
    assert transliterate("Щербаков Игорь") == "Shcherbakov Igor"
    assert transliterate("Иванов Петр") == "Ivanov Petr"


def test_capital_letters_map_to_capitalised_digraphs():
    assert transliterate("ЮЛИЯ") == "IuLIIa"
    assert transliterate("ООО ЩИТ") == "OOO ShchIT"


def test_letters_outside_the_scheme_are_kept():
    assert transliterate("Петро-Іван") == "Petro-Іvan"
    assert transliterate("Їжак") == "Їzhak"
    assert transliterate("Smith, John 1970") == "Smith, John 1970"
    assert transliterate("") == ""


def test_transliteration_is_deterministic():
    assert transliterate("Олександр Шевченко") == transliterate("Олександр Шевченко")


def test_unknown_scheme_is_rejected():
    assert get_scheme("icao_doc_9303") is not None
    with pytest.raises(ValueError):
        transliterate("Иванов", "no_such_scheme")
