from conftest import ddg_payload, infobox
from ddgenrich.ddg.parse import (
    RelatedTopic,
    as_int,
    as_text,
    parse_infobox,
    parse_related_topics,
    parse_search_result,
    pretty_result,
)


def test_as_text_and_as_int_coercion():
    assert as_text("x") == "x"
    assert as_text(3) == "3"
    assert as_text(True) is None
    assert as_text({"a": 1}) is None

    assert as_int("270") == 270
    assert as_int(270.0) == 270
    assert as_int("") is None
    assert as_int(False) is None


def test_parse_full_result(acme_payload):
    r = parse_search_result(acme_payload)

    assert r.heading == "Acme"
    assert r.entity == "company"
    assert r.abstract == "Acme is a company."
    assert r.infobox is not None
    assert [c.label for c in r.infobox.content] == ["Founded"]
    assert r.infobox.content[0].value == "1990"
    assert r.infobox.primary_identifier() == "Acme"
    assert [x.first_url for x in r.results] == ["https://www.acme.example/"]
    # raw body kept for debugging, not for equality
    assert r.raw["Heading"] == "Acme"


def test_empty_string_infobox_is_none():
    r = parse_search_result(ddg_payload(infobox=None))
    assert r.infobox is None


def test_infobox_without_meta_has_no_primary_identifier():
    ib = parse_infobox(infobox(("Founded", "1990")))
    assert ib is not None
    assert ib.meta == []
    assert ib.primary_identifier() is None


def test_mistyped_fields_are_dropped():
    r = parse_search_result(
        {
            "Heading": ["not", "text"],
            "ImageIsLogo": "1",
            "RelatedTopics": "nope",
            "Results": [None, 3, {"FirstURL": "https://a.example/"}],
        }
    )
    assert r.heading is None
    assert r.image_is_logo == 1
    assert r.related_topics == []
    assert len(r.results) == 1


def test_non_dict_body_gives_empty_result():
    r = parse_search_result(None)
    assert r.heading is None
    assert r.infobox is None


def test_related_topic_group_keeps_its_slot():
    topics = parse_related_topics(
        [
            {"Text": "first", "FirstURL": "https://duckduckgo.com/a"},
            {
                "Name": "Companies",
                "Topics": [
                    {"Text": "inner", "FirstURL": "https://duckduckgo.com/b"},
                ],
            },
            {
                "Text": "third",
                "FirstURL": "https://duckduckgo.com/c",
                "Icon": {"URL": "/i/c.png", "Height": "", "Width": ""},
            },
        ]
    )
    assert [t.text for t in topics] == ["first", None, "third"]
    assert topics[1] == RelatedTopic()
    assert topics[2].icon is not None
    assert topics[2].icon.url == "/i/c.png"
    assert topics[2].icon.height is None


def test_pretty_result_is_short_json(acme_payload):
    s = pretty_result(parse_search_result(acme_payload))
    assert '"Heading": "Acme"' in s
    assert len(s) <= 600
