from copy import copy, deepcopy
from pickle import loads, dumps
from weakref import ref

import pytest

from logmerge.entry import EXHAUSTED
from logmerge.utils.sentinel import is_sentinel, sentinel


@pytest.fixture(scope="function")
def clear_cache():
    cached = dict(sentinel._cache)
    yield
    sentinel._cache.clear()
    sentinel._cache.update(cached)


@pytest.mark.usefixtures("clear_cache")
class TestSentinel:
    def test_name(self):
        assert sentinel("a").__name__ == "a"

    def test_doc(self):
        assert sentinel("a", "b").__doc__ == "b"

    def test_doc_differentiates(self):
        a = sentinel("sentinel-name", "original-doc")
        with pytest.raises(ValueError) as excinfo:
            sentinel(a.__name__, "new-doc")

        msg = str(excinfo.value)
        assert a.__name__ in msg
        assert a.__doc__ in msg
        assert "new-doc" in msg

    def test_memo(self):
        assert sentinel("a") is sentinel("a")

    def test_copy(self):
        a = sentinel("a")
        assert copy(a) is a

    def test_deepcopy(self):
        a = sentinel("a")
        assert deepcopy(a) is a

    def test_repr(self):
        assert repr(sentinel("a")) == "sentinel('a')"

    def test_new(self):
        with pytest.raises(TypeError):
            type(sentinel("a"))()

    def test_pickle_roundtrip(self):
        a = sentinel("a")
        assert loads(dumps(a)) is a

    def test_weakreferencable(self):
        ref(sentinel("a"))

    def test_no_truth_value(self):
        with pytest.raises(TypeError):
            bool(sentinel("a"))

    def test_is_sentinel(self):
        assert is_sentinel(sentinel("a"))
        assert is_sentinel(EXHAUSTED)
        assert not is_sentinel(None)
        assert not is_sentinel("a")

    def test_exhausted_pickles_to_itself(self):
        assert loads(dumps(EXHAUSTED)) is EXHAUSTED
