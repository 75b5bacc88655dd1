import pytest

from crowbot.url_rules import DEFAULT_POLICY, UrlPolicy, host_from_url, load_url_policy
from crowbot.url_validator import RejectReason, UrlVerdict, check_url, validate_url


CROW = (
    "Oh, I'm Crow. That's... mostly right, I guess? You forgot to mention I'm incredibly "
    "handsome. And modest. Very, very modest. "
)
CROW_QUERY = (
    "Oh%2C%20I%27m%20Crow.%20That%27s...%20mostly%20right%2C%20I%20guess%3F%20You%20forgot"
    "%20to%20mention%20I%27m%20incredibly%20handsome.%20And%20modest.%20Very%2C%20very%20modest."
)

ACCEPTED_FACT = (
    "Carbon dioxide fertilization greens the Earth "
    "https://www.nasa.gov/feature/goddard/2016/co2-greening"
)


def custom_policy():
    return UrlPolicy.from_config(
        {
            "search_engines": ["example.com/find"],
            "news_domains": ["thehindu.com"],
            "shape": {"max_length": 40},
        }
    )


def test_accepts_plain_fact_link():
    verdict = validate_url("Check out this fact: https://www.nasa.gov/feature/goddard/2016/co2-greening")
    assert verdict == UrlVerdict.accept("https://www.nasa.gov/feature/goddard/2016/co2-greening")
    assert verdict.accepted is True


def test_accepts_trusted_news_link():
    text = "Article title: New AI Breakthrough https://techcrunch.com/2025/07/new-ai-breakthrough-changes-everything/"
    assert validate_url(text).accepted is True
    assert validate_url("Article title: Chips https://www.reuters.com/technology/chips-2025").accepted is True


def test_no_url():
    verdict = validate_url("nothing to see here")
    assert verdict.reason is RejectReason.NO_URL_FOUND
    assert verdict.url is None


@pytest.mark.parametrize(
    "url",
    [
        "https://www.google.com/search?q=carbon",
        "https://duckduckgo.com/?q=carbon+dioxide+fertilization",
        "https://www.bing.com/search?q=new+ai+breakthrough",
        "http://search.yahoo.com/search?p=crow",
    ],
)
def test_search_engines_rejected_regardless_of_context(url):
    assert validate_url(f"Check out: {url}").reason is RejectReason.SEARCH_ENGINE
    assert validate_url(f"Article title: Something {url}").reason is RejectReason.SEARCH_ENGINE


def test_search_engine_rule_fires_before_echo():
    for host in ("https://www.google.com/search?hl=en&q=", "https://duckduckgo.com/?q="):
        assert validate_url(CROW + host + CROW_QUERY).reason is RejectReason.SEARCH_ENGINE


def test_untrusted_domain_in_news_context():
    text = "Article title: New AI Breakthrough https://example.com/2025/07/new-ai-breakthrough"
    assert validate_url(text).reason is RejectReason.NEWS_CONTEXT_BUT_UNTRUSTED_DOMAIN


def test_news_allow_list_is_exact_host_match():
    text = "Article title: Scoop https://techcrunch.com.evil.io/story"
    assert validate_url(text).reason is RejectReason.NEWS_CONTEXT_BUT_UNTRUSTED_DOMAIN


def test_too_long():
    text = "See https://example.com/" + "a" * 100
    assert validate_url(text).reason is RejectReason.URL_TOO_LONG


def test_spaces_in_scraped_url():
    assert check_url("https://example.com/some page").reason is RejectReason.URL_CONTAINS_SPACES


def test_echo_on_regular_host():
    text = "Carbon dioxide fertilization greens the Earth https://example.com/carbon-dioxide-fertilization"
    verdict = validate_url(text)
    assert verdict.reason is RejectReason.URL_ECHOES_MESSAGE_TEXT
    assert verdict.url == "https://example.com/carbon-dioxide-fertilization"


def test_echo_is_case_sensitive():
    text = "Carbon dioxide fertilization greens the Earth https://example.com/carbon-facts"
    assert validate_url(text).accepted is True


def test_echo_closure_from_accepted_text():
    assert validate_url(ACCEPTED_FACT).accepted is True
    for word in ("Carbon", "dioxide", "fertilization"):
        echoed = ACCEPTED_FACT + "/" + word
        assert validate_url(echoed).reason is RejectReason.URL_ECHOES_MESSAGE_TEXT


def test_verdict_is_stable():
    for text in (ACCEPTED_FACT, CROW + "https://duckduckgo.com/?q=" + CROW_QUERY, "no url"):
        assert validate_url(text) == validate_url(text)


def test_custom_policy():
    p = custom_policy()
    assert validate_url("go https://example.com/find?q=x", p).reason is RejectReason.SEARCH_ENGINE
    assert validate_url("Article title: X https://www.thehindu.com/news/a", p).accepted is True
    assert validate_url("go https://example.org/" + "b" * 40, p).reason is RejectReason.URL_TOO_LONG


def test_policy_rejects_malformed_rules():
    with pytest.raises(ValueError):
        UrlPolicy.from_config({"news_domains": "cnn.com"})
    with pytest.raises(ValueError):
        UrlPolicy.from_config(["cnn.com"])


def test_default_rule_table():
    p = load_url_policy()
    assert p == DEFAULT_POLICY
    assert len(p.news_domains) == 24
    assert "slashdot.org" in p.news_domains
    assert p.news_marker == "Article title:"


def test_missing_rules_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_url_policy(str(tmp_path / "nope.yaml"))


def test_host_from_url():
    assert host_from_url("https://www.BBC.com/news/x") == "bbc.com"
    assert host_from_url("https://www.theregister.com:443/a") == "theregister.com"
    assert host_from_url("") is None
