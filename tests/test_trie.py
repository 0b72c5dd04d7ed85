from zeitgeist.trie import Trie


def _keywords():
    trie = Trie()
    for word in ("CREATE", "DROP", "DATABASE", "DATABASES", "TABLE"):
        trie.insert(word)
    return trie


def test_inserted_words_exist():
    trie = _keywords()
    for word in ("CREATE", "DROP", "DATABASE", "DATABASES", "TABLE"):
        assert trie.exists(word)
        assert word in trie


def test_prefix_is_not_a_word():
    trie = _keywords()
    assert not trie.exists("DATA")
    assert not trie.exists("CREAT")
    assert "TAB" not in trie


def test_unknown_and_longer_words():
    trie = _keywords()
    assert not trie.exists("SELECT")
    assert not trie.exists("TABLES")


def test_only_marked_nodes_valid():
    trie = Trie()
    trie.insert("koarz")
    trie.insert("ko")
    assert trie.exists("ko")
    assert trie.exists("koarz")
    assert not trie.exists("koa")


def test_remove_keeps_longer_word():
    trie = _keywords()
    trie.remove("DATABASE")
    assert not trie.exists("DATABASE")
    assert trie.exists("DATABASES")


def test_remove_missing_word_is_noop():
    trie = _keywords()
    trie.remove("SELECT")
    trie.remove("DAT")
    assert trie.exists("DATABASE")
    assert not trie.exists("SELECT")


def test_reinsert_after_remove():
    trie = _keywords()
    trie.remove("DROP")
    trie.insert("DROP")
    assert trie.exists("DROP")


def test_empty_string():
    trie = Trie()
    assert not trie.exists("")
    trie.insert("")
    assert trie.exists("")
    assert not trie.exists("a")


def test_contains_non_string():
    trie = _keywords()
    assert 5 not in trie


def test_case_sensitive():
    trie = _keywords()
    assert not trie.exists("create")