"""Property and end-to-end tests against the bundled dictionary."""

import pytest

import anagrove
from anagrove import ConstraintSet, LetterProfile, PartialMode, SearchResult

SEEDS = ["listen", "dormitory", "astronomer", "the eyes", "stone notes", "Earth!"]


def _profile_of(words):
    total = LetterProfile()
    for w in words:
        total = total + LetterProfile.from_text(w)
    return total


def test_lazy_engine_attribute(engine):
    assert isinstance(engine, anagrove.AnagramEngine)


def test_listen_example(engine):
    result = engine.generate("listen", min_word_length=3, max_words=2, top_n=10**6)
    assert isinstance(result, SearchResult)
    assert "silent" in result.anagrams
    for combo in result.anagrams + result.partials:
        assert "t" not in combo.split()


def test_classic_anagrams(engine):
    assert "dirty room" in engine.generate("Dormitory", max_words=2).anagrams
    assert "moon starer" in engine.generate("astronomer", max_words=2).anagrams
    assert "see they" in engine.generate("the eyes", max_words=2).anagrams


def test_single_letter_seed(engine):
    result = engine.generate("a", min_word_length=2)
    assert result.anagrams == []
    assert result.partials == []


def test_candidates(engine):
    words = engine.candidates("listen")
    assert words[0] == "its"
    assert "silent" in words and "tinsel" in words
    assert "t" not in words
    assert engine.candidates("") == []


def test_anagrams_of(engine):
    assert set(engine.anagrams_of("listen")) == {
        "listen", "silent", "enlist", "tinsel", "inlets",
    }


@pytest.mark.parametrize("seed", SEEDS)
def test_exact_uses_every_letter(engine, seed):
    target = LetterProfile.from_text(seed)
    for combo in engine.generate(seed, max_words=3).anagrams:
        assert _profile_of(combo.split()) == target


@pytest.mark.parametrize("seed", SEEDS)
def test_partials_are_maximal_dead_ends(engine, seed):
    c = ConstraintSet.build(min_word_length=3, max_words=3)
    target = LetterProfile.from_text(seed)
    pool = engine.dictionary.filtered(c)
    for combo in engine.search(seed, c).partials:
        words = combo.split()
        used = _profile_of(words)
        assert target.contains(used) and used != target
        if len(words) < c.max_words:
            left = target - used
            assert not any(
                left.contains(e.profile) for e in pool if e.word not in words
            ), combo


@pytest.mark.parametrize("seed", SEEDS)
def test_no_duplicates(engine, seed):
    result = engine.generate(seed, min_word_length=2, max_words=3)
    for collection in (result.anagrams, result.partials):
        assert len(collection) == len(set(collection))
        for combo in collection:
            words = combo.split()
            assert len(words) == len(set(words))


def test_excludes_and_includes(engine):
    result = engine.generate(
        "dormitory", max_words=3, excludes="moor", includes="dirt",
    )
    assert result.anagrams == ["dirty room"]
    for combo in result.anagrams + result.partials:
        words = combo.split()
        assert "moor" not in words
        assert any("dirt" in w for w in words)


@pytest.mark.parametrize("mode", list(PartialMode))
@pytest.mark.parametrize("seed", SEEDS)
def test_excludes_and_includes_hold_everywhere(engine, seed, mode):
    words = engine.candidates(seed)
    excluded = words[0]
    tokens = sorted({words[1][:2], words[-1][-2:]})
    result = engine.generate(
        seed, excludes=excluded, includes=tokens, partial_mode=mode,
    )

    def ok(combo):
        parts = combo.split()
        return excluded not in parts and all(
            any(t in w for w in parts) for t in tokens
        )

    for combo in result.anagrams + result.partials:
        assert ok(combo), combo
    # The gate drops nothing that satisfies both constraints.
    unconstrained = engine.generate(seed, partial_mode=PartialMode.NONE)
    assert set(result.anagrams) == {c for c in unconstrained.anagrams if ok(c)}


@pytest.mark.parametrize("seed", ["listen", "astronomer", "the eyes"])
def test_max_words_monotonic(engine, seed):
    # Dead-end partials may shrink as more words fit; frontier partials
    # and exact results only grow.
    previous_exact, previous_frontier = set(), set()
    for max_words in range(1, 5):
        result = engine.generate(
            seed, max_words=max_words, partial_mode=PartialMode.FRONTIER,
        )
        exact, frontier = set(result.anagrams), set(result.partials)
        assert previous_exact <= exact
        assert previous_frontier <= frontier
        previous_exact, previous_frontier = exact, frontier


def test_top_n_shrinks_pool(engine):
    full = engine.generate("listen", max_words=2)
    common = engine.generate("listen", max_words=2, top_n=50)
    assert set(common.anagrams) <= set(full.anagrams)
    assert common.candidates < full.candidates


def test_invalid_input_before_search(engine):
    with pytest.raises(anagrove.InvalidInput) as exc:
        engine.generate("listen", max_words=anagrove.MAX_WORDS_CEILING + 1)
    assert exc.value.field == "max_words"


def test_workers(engine):
    serial = engine.generate("stone notes", max_words=3)
    parallel = engine.generate("stone notes", max_words=3, workers=3)
    assert sorted(serial.anagrams) == sorted(parallel.anagrams)
    assert sorted(serial.partials) == sorted(parallel.partials)


@pytest.mark.parametrize("field, options", [
    ("limit", {"limit": 0}),
    ("limit", {"limit": "5"}),
    ("partial_mode", {"partial_mode": "bogus"}),
    ("workers", {"workers": 0}),
])
def test_invalid_search_options(engine, field, options):
    with pytest.raises(anagrove.InvalidInput) as exc:
        engine.generate("listen", **options)
    assert exc.value.field == field
