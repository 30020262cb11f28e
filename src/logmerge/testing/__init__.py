from .core import (  # noqa
    AsyncFailingSource,
    CollectingSink,
    FailingSource,
    check_non_decreasing,
    make_entries,
    make_sources,
)
from logmerge.hooks.testing import TestingHooks  # noqa
