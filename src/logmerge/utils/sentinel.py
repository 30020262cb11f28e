"""
Construction of sentinel objects.

Sentinel objects are used when you only care to check for object identity,
e.g. to mark "no more entries" without overloading ``None`` or any other
value a caller could legitimately hand back.
"""
from textwrap import dedent


class _Sentinel:
    """Base class for Sentinel objects."""

    __slots__ = ("__weakref__",)


def is_sentinel(obj):
    return isinstance(obj, _Sentinel)


def sentinel(name, doc=None):
    """Get the sentinel named ``name``, creating it on first use.

    Parameters
    ----------
    name : str
        The name of the sentinel. Sentinels are memoized by name.
    doc : str, optional
        The docstring of the sentinel.

    Raises
    ------
    ValueError
        Raised when ``name`` is already bound to a sentinel with a different
        docstring.
    """
    try:
        value = sentinel._cache[name]
    except KeyError:
        pass
    else:
        if doc == value.__doc__:
            return value

        raise ValueError(
            dedent(
                """\
            New sentinel value %r conflicts with an existing sentinel of the
            same name.
            Old sentinel docstring: %r
            New sentinel docstring: %r
            """,
            )
            % (name, value.__doc__, doc)
        )

    @object.__new__  # bind a single instance to the name 'Sentinel'
    class Sentinel(_Sentinel):
        __doc__ = doc
        __name__ = name

        def __new__(cls):
            raise TypeError("cannot create %r instances" % name)

        def __repr__(self):
            return "sentinel(%r)" % name

        def __bool__(self):
            # Sentinels are compared by identity only.
            raise TypeError("sentinel(%r) has no truth value" % name)

        def __reduce__(self):
            return sentinel, (name, doc)

        def __deepcopy__(self, _memo):
            return self

        def __copy__(self):
            return self

    sentinel._cache[name] = Sentinel
    return Sentinel


sentinel._cache = {}
