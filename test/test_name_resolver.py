from types import SimpleNamespace

from importing.name_resolver import fold_name, resolve


def _named(*names):
    return [SimpleNamespace(name=n, idx=i) for i, n in enumerate(names)]


def test_resolve_case_insensitive():
    candidates = _named("Work", "Home")
    assert resolve("work", candidates).idx == 0
    assert resolve("HOME", candidates).idx == 1


def test_resolve_returns_first_match():
    candidates = _named("Dự án A", "dự án a")
    assert resolve("DỰ ÁN A", candidates).idx == 0


def test_resolve_absent():
    candidates = _named("Work")
    assert resolve("Play", candidates) is None
    assert resolve("", candidates) is None
    assert resolve("   ", candidates) is None
    assert resolve(None, candidates) is None
    assert resolve("Work", []) is None


def test_fold_name_ignores_surrounding_space_and_normal_form():
    import unicodedata

    decomposed = unicodedata.normalize("NFD", "Học tập")
    assert fold_name(f"  {decomposed} ") == fold_name("học tập")
