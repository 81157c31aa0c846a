#!filepath: tests/utils_test/test_array_utils.py
import locale

import pytest

from shutility import array, ExternalOperationFailed, InvalidArgument
from shutility.config import Collation


# ================================================================
# contains / is_empty
# ================================================================
def test_contains_every_member():
    items = ["a", "b c", "", "d"]
    for e in items:
        assert array.contains(e, items) is True


def test_contains_exact_match_only():
    items = ["a", "b c", "d"]
    assert array.contains("b", items) is False
    assert array.contains("A", items) is False
    assert array.contains(" a", items) is False


def test_contains_empty_haystack():
    assert array.contains("a", []) is False


def test_contains_missing_haystack():
    with pytest.raises(InvalidArgument):
        array.contains("a", None)


def test_is_empty():
    assert array.is_empty([]) is True
    assert array.is_empty([""]) is False
    assert array.is_empty(["a", "b"]) is False


# ================================================================
# dedupe
# ================================================================
def test_dedupe_keeps_first_occurrence_order():
    assert array.dedupe(["a", "b", "a", "c"]) == ["a", "b", "c"]
    assert array.dedupe(["c", "a", "c", "b", "a"]) == ["c", "a", "b"]


def test_dedupe_drops_empty_strings():
    assert array.dedupe(["", "a", "", "a", ""]) == ["a"]
    assert array.dedupe(["", ""]) == []


def test_dedupe_idempotent():
    s = ["x", "y", "", "x", "z", "y"]
    once = array.dedupe(s)
    assert array.dedupe(once) == once


def test_dedupe_does_not_normalize():
    assert array.dedupe(["a", "a ", "A"]) == ["a", "a ", "A"]


# ================================================================
# join
# ================================================================
def test_join_with_glue():
    assert array.join(",", ["a", "b", "c"]) == "a,b,c"


def test_join_empty_glue():
    assert array.join("", ["a", "b"]) == "ab"


def test_join_edge_cases():
    assert array.join(",", []) == ""
    assert array.join(",", ["only"]) == "only"
    assert array.join(" - ", ["a", "b"]) == "a - b"


def test_join_missing_glue():
    with pytest.raises(InvalidArgument):
        array.join(None, ["a"])


# ================================================================
# reverse / merge / random_element
# ================================================================
def test_reverse():
    assert array.reverse(["1", "2", "3", "4", "5"]) == ["5", "4", "3", "2", "1"]
    assert array.reverse(["1", "2"]) == ["2", "1"]
    assert array.reverse([]) == []


def test_reverse_involution_and_no_mutation():
    s = ["a", "b", "c", "d"]
    r = array.reverse(s)
    assert s == ["a", "b", "c", "d"]
    assert array.reverse(r) == s


def test_merge_preserves_order_and_duplicates():
    assert array.merge(["a", "c"], ["d", "c"]) == ["a", "c", "d", "c"]
    assert array.merge([], ["x"]) == ["x"]


def test_merge_requires_two_sequences():
    with pytest.raises(InvalidArgument):
        array.merge(["a"], None)


def test_random_element_picks_member():
    items = ["a", "b", "c", "d"]
    for _ in range(50):
        assert array.random_element(items) in items


def test_random_element_uses_index(monkeypatch):
    monkeypatch.setattr("random.randrange", lambda n: n - 1)
    assert array.random_element(["a", "b", "c"]) == "c"


def test_random_element_empty():
    with pytest.raises(InvalidArgument):
        array.random_element([])


# ================================================================
# sort / rsort / bsort
# ================================================================
def test_sort_bytewise():
    arr = ["a c", "a", "d", "2", "1", "4 5"]
    assert array.sort(arr) == ["1", "2", "4 5", "a", "a c", "d"]


def test_sort_uppercase_before_lowercase():
    assert array.sort(["b", "B", "a", "A"]) == ["A", "B", "a", "b"]


def test_rsort():
    arr = ["a c", "a", "d", "2", "1", "4 5"]
    assert array.rsort(arr) == ["d", "a c", "a", "4 5", "2", "1"]


def test_rsort_is_reverse_of_sort_without_ties():
    arr = ["q", "w", "e", "r", "t", "y"]
    assert array.rsort(arr) == array.reverse(array.sort(arr))


def test_sort_is_non_decreasing_permutation():
    arr = ["b", "a", "b", "", "c", "a"]
    out = array.sort(arr)
    assert sorted(out) == sorted(arr)
    assert all(x <= y for x, y in zip(out, out[1:]))


@pytest.fixture
def restore_collate():
    setlocale = locale.setlocale
    saved = setlocale(locale.LC_COLLATE)
    yield
    setlocale(locale.LC_COLLATE, saved)


def test_sort_locale_collation(use_config, restore_collate, monkeypatch):
    monkeypatch.setenv("LC_ALL", "C")
    use_config(array={"collation": Collation.LOCALE})
    out = array.sort(["b", "c", "a"])
    assert out == ["a", "b", "c"]


def test_sort_locale_applies_host_locale(use_config, restore_collate, monkeypatch):
    calls = []

    def fake_setlocale(category, value=None):
        calls.append((category, value))
        return "xx_XX.UTF-8"

    monkeypatch.setattr(locale, "setlocale", fake_setlocale)
    monkeypatch.setattr(locale, "strxfrm", str.lower)
    use_config(array={"collation": Collation.LOCALE})

    assert array.sort(["b", "C", "a"]) == ["a", "b", "C"]
    assert calls == [(locale.LC_COLLATE, "")]


def test_sort_locale_differs_from_byte_order(use_config, restore_collate, monkeypatch):
    monkeypatch.setenv("LC_ALL", "en_US.UTF-8")
    try:
        locale.setlocale(locale.LC_COLLATE, "en_US.UTF-8")
    except locale.Error:
        pytest.skip("en_US.UTF-8 locale not installed")
    locale.setlocale(locale.LC_COLLATE, "C")

    use_config(array={"collation": Collation.LOCALE})
    out = array.sort(["b", "B", "a", "A"])
    assert out != ["A", "B", "a", "b"]
    assert out.index("a") < out.index("B")


def test_sort_locale_unsupported(use_config, restore_collate, monkeypatch):
    def broken_setlocale(category, value=None):
        raise locale.Error("unsupported locale setting")

    monkeypatch.setattr(locale, "setlocale", broken_setlocale)
    use_config(array={"collation": Collation.LOCALE})

    with pytest.raises(ExternalOperationFailed):
        array.sort(["b", "a"])


def test_bsort_numeric():
    assert array.bsort([4, 5, 1, 3]) == [1, 3, 4, 5]
    assert array.bsort(["10", "9", "-1", "100"]) == ["-1", "9", "10", "100"]


def test_bsort_returns_original_values():
    assert array.bsort([" 2", "1"]) == ["1", " 2"]


@pytest.mark.parametrize("bad", [["1", "a"], ["1.5"], [1.5], [True, 2], [None]])
def test_bsort_rejects_non_integers(bad):
    with pytest.raises(InvalidArgument):
        array.bsort(bad)


def test_sequence_ops_total_on_empty():
    assert array.dedupe([]) == []
    assert array.sort([]) == []
    assert array.rsort([]) == []
    assert array.bsort([]) == []
