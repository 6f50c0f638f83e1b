from services.keyword_extractor import (
    extract_keywords,
    extract_multi_word_phrases,
    match_keyword_exact,
    match_keywords,
)


def test_extract_keywords():
    jd = "We need a Python developer with experience in React and Docker."
    keywords = extract_keywords(jd)
    assert "python" in keywords
    assert "react" in keywords
    assert "docker" in keywords
    assert "we" not in keywords
    assert "experience" not in keywords


def test_phrases_come_first_and_cover_their_words():
    jd = "Machine learning engineer with Python, machine learning and SQL."
    keywords = extract_keywords(jd)
    assert keywords[0] == "machine learning"
    assert "machine" not in keywords
    assert "learning" not in keywords
    assert "python" in keywords
    assert "sql" in keywords


def test_words_ranked_by_frequency():
    keywords = extract_keywords("Kafka. Python python python. Docker docker.")
    assert keywords == ["python", "docker", "kafka"]


def test_two_letter_acronyms_survive():
    keywords = extract_keywords("Experience with ML and UX research, go to market")
    assert "ml" in keywords
    assert "ux" in keywords
    assert "go" not in keywords


def test_multi_word_phrases_normalized():
    phrases = extract_multi_word_phrases("Machine   Learning and CI/CD plus micro-services")
    assert "machine learning" in phrases
    assert "ci/cd" in phrases
    assert "micro-services" in phrases


def test_all_keywords_present_scores_100():
    jd = "Python Docker Kubernetes Terraform"
    resume = "I ship Python services in Docker on Kubernetes, provisioned with Terraform."
    result = match_keywords(resume, extract_keywords(jd))
    assert result.match_pct == 100
    assert result.missing == []


def test_empty_keyword_list_is_perfect_match():
    result = match_keywords("anything", [])
    assert result.match_pct == 100
    assert result.matched == []
    assert result.missing == []


def test_match_pct_rounds():
    result = match_keywords("python and docker", ["python", "docker", "kafka"])
    assert result.matched == ["python", "docker"]
    assert result.missing == ["kafka"]
    assert result.match_pct == 67


def test_strict_requires_word_boundary():
    assert not match_keyword_exact("java", "JavaScript developer")
    assert match_keyword_exact("java", "Java, Spring")
    assert match_keyword_exact("c++", "Expert in C++ and Go")


def test_fuzzy_substring_and_stem():
    resume = "JavaScript developer who tested APIs"
    strict = match_keywords(resume, ["java", "testing"])
    fuzzy = match_keywords(resume, ["java", "testing"], strict_mode=False)
    assert strict.matched == []
    assert fuzzy.matched == ["java", "testing"]


def test_fuzzy_phrase_words_need_not_be_adjacent():
    resume = "Built a pipeline for data ingestion"
    assert match_keywords(resume, ["data pipeline"]).match_pct == 0
    assert match_keywords(resume, ["data pipeline"], strict_mode=False).match_pct == 100


def test_match_pct_rounds_half_up():
    keywords = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel"]
    result = match_keywords("alpha", keywords)
    assert result.matched == ["alpha"]
    assert result.match_pct == 13
