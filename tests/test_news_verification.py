from crowbot.news_verification import ArticleInfo, extract_article_info, verify_article_url


def test_extract_article_info():
    text = "New AI Breakthrough: https://techcrunch.com/2025/07/new-ai-breakthrough/ Researchers did a thing."
    assert extract_article_info(text) == ArticleInfo(
        title="New AI Breakthrough",
        url="https://techcrunch.com/2025/07/new-ai-breakthrough/",
        summary="Researchers did a thing.",
    )


def test_extract_article_info_without_link():
    assert extract_article_info("Just a headline") is None
    assert extract_article_info("") is None


def test_verify_article_url_accepts_dated_slug():
    assert verify_article_url("https://arstechnica.com/science/2025/07/new-battery-chemistry-explained") is True


def test_verify_article_url_rejects_unknown_domain():
    assert verify_article_url("https://example.com/science/2025/07/new-battery-chemistry-explained") is False


def test_verify_article_url_rejects_shallow_or_generic():
    assert verify_article_url("https://www.wired.com/story/") is False
    assert verify_article_url("https://www.wired.com/science/2025/07") is False
    assert verify_article_url("https://www.wired.com/science/2025/story") is False
