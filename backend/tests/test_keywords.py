from knowledge_bank.utils.keywords import build_websearch_query, literal_terms, merge_keywords


def test_literal_terms_keep_words_longer_than_two_characters():
    assert literal_terms("IA en la medicina moderna") == ["medicina", "moderna"]
    assert literal_terms("   ") == []


def test_merge_keeps_first_occurrence_order():
    assert merge_keywords(["a1", "b22", "a1"], ["c33", "b22"]) == ["a1", "b22", "c33"]


def test_merge_is_case_sensitive():
    assert merge_keywords(["Python"], ["python"]) == ["Python", "python"]


def test_merge_drops_blank_entries():
    assert merge_keywords(["", "  ", "redes"], ["redes "]) == ["redes"]


def test_websearch_query_joins_with_or():
    assert build_websearch_query(["ia", "redes"]) == "ia or redes"


def test_websearch_query_quotes_phrases_and_strips_quotes():
    assert build_websearch_query(['machine learning', 'say "hi"', "  "]) == '"machine learning" or "say hi"'


def test_websearch_query_empty():
    assert build_websearch_query([]) == ""
