from hemkoll.scrapers.html_tools import (
    Rule,
    extract_meta,
    first_match,
    format_kronor,
    iter_json_ld,
    make_soup,
    parse_kronor,
    regex_rule,
    title_case_slug,
)


def test_price_text_and_integer_agree():
    assert parse_kronor("11 500 000 kr") == 11500000
    assert format_kronor(11500000) == "11 500 000 kr"
    assert parse_kronor(format_kronor(11500000)) == 11500000


def test_parse_kronor_without_digits_is_zero():
    assert parse_kronor("") == 0
    assert parse_kronor(None) == 0
    assert parse_kronor("pris saknas") == 0


def test_first_match_respects_rule_order():
    calls = []

    def rule(name, value):
        def extract(html):
            calls.append(name)
            return value
        return Rule(name, extract)

    rules = (rule("a", None), rule("b", "second"), rule("c", "third"))

    assert first_match(rules, "<html>") == "second"
    assert calls == ["a", "b"]


def test_regex_rule_converts_group():
    rule = regex_rule("year", r"Byggår.{0,10}?(\d{4})", lambda m: int(m.group(1)))

    assert rule.extract("<dt>Byggår</dt><dd>1929</dd>") == 1929
    assert rule.extract("<dt>Byggår</dt>") is None


def test_title_case_slug():
    assert title_case_slug("kungsholms-strand-7a") == "Kungsholms Strand 7a"
    assert title_case_slug("") == ""


def test_extract_meta_attribute_order_and_name():
    soup = make_soup(
        '<meta content="A &amp; B" property="og:title">'
        '<meta name="og:description" content="desc">'
    )

    assert extract_meta(soup, "og:title") == "A & B"
    assert extract_meta(soup, "og:description") == "desc"
    assert extract_meta(soup, "og:image") is None


def test_iter_json_ld_skips_broken_blocks():
    soup = make_soup(
        '<script type="application/ld+json">{"broken": </script>'
        '<script type="application/ld+json">{"@type": "Product"}</script>'
    )

    assert list(iter_json_ld(soup)) == [{"@type": "Product"}]
    assert list(iter_json_ld(soup, limit=1)) == []
