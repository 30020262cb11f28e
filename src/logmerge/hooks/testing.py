from collections import namedtuple
from contextlib import contextmanager
from functools import wraps

from interface import implements

from .iface import MERGE_HOOKS_CONTEXT_MANAGERS, MergeHooks


Call = namedtuple("Call", "method_name args kwargs")


class ContextCall(namedtuple("ContextCall", "state call")):
    @property
    def method_name(self):
        return self.call.method_name

    @property
    def args(self):
        return self.call.args

    @property
    def kwargs(self):
        return self.call.kwargs


def testing_hooks_method(method_name):
    """Factory function for making testing methods."""
    if method_name in MERGE_HOOKS_CONTEXT_MANAGERS:
        # Generate a method that records entering and exiting the context.
        @wraps(getattr(MergeHooks, method_name))
        @contextmanager
        def ctx(self, *args, **kwargs):
            call = Call(method_name, args, kwargs)
            self.trace.append(ContextCall("enter", call))
            yield
            self.trace.append(ContextCall("exit", call))

        return ctx

    else:
        # Generate a method that records the call.
        @wraps(getattr(MergeHooks, method_name))
        def method(self, *args, **kwargs):
            self.trace.append(Call(method_name, args, kwargs))

        return method


class TestingHooks(implements(MergeHooks)):
    """A hooks implementation that keeps a trace of hook method calls."""

    # Not a test case.
    __test__ = False

    def __init__(self):
        self.trace = []

    def clear(self):
        self.trace = []

    def calls(self, method_name, state="enter"):
        """The recorded calls to ``method_name``, in order. For context
        managers, only calls in ``state`` ('enter' or 'exit') are returned.
        """
        out = []
        for item in self.trace:
            if item.method_name != method_name:
                continue
            if isinstance(item, ContextCall):
                if item.state != state:
                    continue
                item = item.call
            out.append(item)
        return out

    # Implement all interface methods by recording calls.
    locals().update(
        {
            name: testing_hooks_method(name)
            for name in MergeHooks._signatures
        }
    )


del testing_hooks_method
