from todovibe.domain.task import extract_tags


def test_extracts_tags_in_order():
    clean_title, tags = extract_tags("Buy milk #errand #home")
    assert clean_title == "Buy milk"
    assert tags == ("errand", "home")


def test_tags_anywhere_in_title():
    result = extract_tags("#work Write #urgent report")
    assert result.clean_title == "Write report"
    assert result.tags == ("work", "urgent")


def test_duplicate_tags_are_kept():
    assert extract_tags("a #x b #x").tags == ("x", "x")


def test_lone_hash_is_a_word():
    result = extract_tags("Item # 5")
    assert result.clean_title == "Item # 5"
    assert result.tags == ()


def test_whitespace_collapses_to_single_spaces():
    assert extract_tags("  Call   mom \t #family ").clean_title == "Call mom"


def test_only_tags_gives_empty_title():
    result = extract_tags("#a #b")
    assert result.clean_title == ""
    assert result.tags == ("a", "b")


def test_words_and_tags_recombine():
    raw = "plan #q1 the #work offsite #team"
    clean_title, tags = extract_tags(raw)
    rebuilt = clean_title.split() + [f"#{tag}" for tag in tags]
    assert sorted(rebuilt) == sorted(raw.split())
    assert clean_title.split() == [w for w in raw.split() if not w.startswith("#")]
