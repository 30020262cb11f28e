from contextlib import ExitStack, contextmanager
from functools import wraps

from interface import implements

from .iface import MERGE_HOOKS_CONTEXT_MANAGERS, MergeHooks
from .no import NoHooks


def delegating_hooks_method(method_name):
    """Factory function for making DelegatingHooks methods."""
    if method_name in MERGE_HOOKS_CONTEXT_MANAGERS:
        # Generate a contextmanager that enters the context of all child hooks.
        @wraps(getattr(MergeHooks, method_name))
        @contextmanager
        def ctx(self, *args, **kwargs):
            with ExitStack() as stack:
                for hook in self._hooks:
                    sub_ctx = getattr(hook, method_name)(*args, **kwargs)
                    stack.enter_context(sub_ctx)
                yield stack

        return ctx
    else:
        # Generate a method that calls methods of all child hooks.
        @wraps(getattr(MergeHooks, method_name))
        def method(self, *args, **kwargs):
            for hook in self._hooks:
                getattr(hook, method_name)(*args, **kwargs)

        return method


class DelegatingHooks(implements(MergeHooks)):
    """A MergeHooks that delegates to one or more other hooks.

    Parameters
    ----------
    hooks : list[implements(MergeHooks)]
        Sequence of hooks to delegate to.
    """

    def __new__(cls, hooks):
        hooks = list(hooks)
        if len(hooks) == 0:
            return NoHooks()
        elif len(hooks) == 1:
            return hooks[0]
        else:
            self = super(DelegatingHooks, cls).__new__(cls)
            self._hooks = hooks
            return self

    # Implement all interface methods by delegating to corresponding methods on
    # input hooks.
    locals().update(
        {
            name: delegating_hooks_method(name)
            for name in MergeHooks._signatures
        }
    )


del delegating_hooks_method
