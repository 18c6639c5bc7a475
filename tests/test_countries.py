from tour_booking.services.booking import CountryDirectory, countries


def _ids(results):
    return [country.id for country in results]


def test_netherlands_listed_first():
    assert countries.all()[0].id == "nl"
    assert countries.find("nl").code == "+31"
    assert countries.find("NL").name == "Netherlands"


def test_find_unknown():
    assert countries.find("xx") is None
    assert countries.find("") is None
    assert countries.find(None) is None


def test_search_name_token_prefix():
    assert "gb" in _ids(countries.search("kingdom"))
    assert "nz" in _ids(countries.search("zeal"))
    assert set(_ids(countries.search("united"))) >= {"us", "gb", "ae"}


def test_search_the_alias():
    assert _ids(countries.search("the")) == ["nl"]


def test_search_dial_codes():
    assert "nl" in _ids(countries.search("+31"))
    assert "nl" in _ids(countries.search("31"))
    assert set(_ids(countries.search("+1"))) == {"us", "ca"}


def test_search_id_prefix():
    assert "de" in _ids(countries.search("de"))


def test_empty_query_matches_nothing():
    assert countries.search("") == []
    assert countries.search("   ") == []


def test_custom_table():
    directory = CountryDirectory(
        [{"id": "xx", "emoji": "🏳️", "name": "Test Land", "code": "+999", "placeholder": ""}]
    )
    assert _ids(directory.all()) == ["xx"]
    assert _ids(directory.search("land")) == ["xx"]
