from feedpulse.utils.nlp import STOP_WORDS, KeywordExtractor, extract_keywords


def test_extract_keywords_by_frequency() -> None:
    text = "The quick brown foxes jump over the lazy dogs. Foxes are quick."

    assert extract_keywords(text) == ["quick", "foxes", "brown", "jump", "over", "lazy", "dogs"]


def test_extract_keywords_ties_keep_first_seen_order() -> None:
    text = "zebra apple mango apple zebra mango"

    assert extract_keywords(text) == ["zebra", "apple", "mango"]


def test_extract_keywords_caps_at_ten() -> None:
    words = [f"word{letter}" for letter in "abcdefghijklmno"]
    keywords = extract_keywords(" ".join(words))

    assert len(keywords) == 10
    assert keywords == words[:10]


def test_extract_keywords_drops_stop_words_and_short_tokens() -> None:
    text = "This that with were, and the cat sat on a mat; everything else matters"
    keywords = extract_keywords(text)

    assert keywords == ["everything", "else", "matters"]
    assert not set(keywords) & STOP_WORDS
    assert all(len(word) > 3 for word in keywords)


def test_extract_keywords_strips_punctuation() -> None:
    assert extract_keywords("Python's growth; python's reach!") == ["pythons", "growth", "reach"]


def test_extract_keywords_empty() -> None:
    assert extract_keywords("") == []
    assert extract_keywords(None) == []


def test_custom_extractor_limit() -> None:
    extractor = KeywordExtractor(max_keywords=2)

    assert extractor.extract_keywords("alpha beta gamma alpha") == ["alpha", "beta"]


def test_explicit_zero_limit_returns_no_keywords() -> None:
    extractor = KeywordExtractor(max_keywords=0)

    assert extractor.max_keywords == 0
    assert extractor.extract_keywords("python python release") == []
